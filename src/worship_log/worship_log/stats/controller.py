from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.stats_service

    def _range():
        today = today_local()
        start = request.args.get("start") or date(today.year, 1, 1)
        end = request.args.get("end") or today
        return start, end

    @app.route("/api/stats", methods=["GET"], endpoint="stats_overview")
    def stats_overview():
        start, end = _range()
        report = svc.build(start=start, end=end)
        return jsonify(
            {
                "success": True,
                "start": report.start.strftime("%Y-%m-%d"),
                "end": report.end.strftime("%Y-%m-%d"),
                "total_services": report.total_services,
                "rows": report.rows,
            }
        )

    @app.route("/api/stats/students/<int:student_id>", methods=["GET"], endpoint="stats_student_detail")
    def stats_student_detail(student_id: int):
        start, end = _range()
        return jsonify({"success": True, "logs": svc.student_detail(student_id, start=start, end=end)})
