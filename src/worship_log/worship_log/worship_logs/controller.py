from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import log_to_dict
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.worship_log_service

    @app.route("/api/logs", methods=["GET"], endpoint="logs_history")
    def logs_history():
        return jsonify({"success": True, "logs": [log_to_dict(log) for log in svc.list_history()]})

    @app.route("/api/logs/<log_date>", methods=["GET"], endpoint="logs_by_date")
    def logs_by_date(log_date: str):
        log = svc.get_by_date(log_date)
        return jsonify({"success": True, "log": log_to_dict(log) if log else None})

    @app.route("/api/logs/<log_date>/info", methods=["PUT"], endpoint="logs_save_info")
    def logs_save_info(log_date: str):
        data = request.get_json(silent=True) or {}
        log_id = svc.save_info(
            log_date,
            prayer=data.get("prayer"),
            prayer_role=data.get("prayer_role"),
            sermon_title=data.get("sermon_title"),
            sermon_text=data.get("sermon_text"),
            preacher=data.get("preacher"),
        )
        return jsonify({"success": True, "log_id": log_id})

    @app.route("/api/logs/<log_date>/coupons", methods=["PUT"], endpoint="logs_save_coupons")
    def logs_save_coupons(log_date: str):
        data = request.get_json(silent=True) or {}
        log_id = svc.save_coupons(
            log_date,
            recipient_count=data.get("recipient_count", 0),
            per_person=data.get("per_person", 0),
        )
        return jsonify({"success": True, "log_id": log_id})

    @app.route("/api/logs/<log_date>/online", methods=["PUT"], endpoint="logs_save_online")
    def logs_save_online(log_date: str):
        data = request.get_json(silent=True) or {}
        log_id = svc.save_online_attendance(log_date, count=data.get("count", 0), names=data.get("names"))
        return jsonify({"success": True, "log_id": log_id})

    @app.route("/api/logs/id/<int:log_id>", methods=["DELETE"], endpoint="logs_delete")
    def logs_delete(log_id: int):
        svc.delete_log(log_id)
        return jsonify({"success": True})
