from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    @app.route("/api/logs/id/<int:log_id>/attendance", methods=["GET"], endpoint="attendance_for_log")
    def attendance_for_log(log_id: int):
        marks = svc.marks_for_log(log_id)
        return jsonify(
            {
                "success": True,
                "marks": {str(student_id): status.value for student_id, status in marks.items()},
                "staff_present": sorted(svc.staff_present(log_id)),
            }
        )

    @app.route(
        "/api/logs/id/<int:log_id>/attendance/<int:student_id>/toggle",
        methods=["POST"],
        endpoint="attendance_toggle",
    )
    def attendance_toggle(log_id: int, student_id: int):
        present = svc.toggle(log_id, student_id)
        return jsonify({"success": True, "present": present})

    @app.route(
        "/api/logs/id/<int:log_id>/attendance/<int:student_id>",
        methods=["PUT"],
        endpoint="attendance_set_status",
    )
    def attendance_set_status(log_id: int, student_id: int):
        data = request.get_json(silent=True) or {}
        raw = data.get("status")
        try:
            status = AttendanceStatus(raw) if raw else None
        except ValueError:
            raise ValidationError(f"Unknown attendance status: {raw!r}") from None
        svc.set_status(log_id, student_id, status)
        return jsonify({"success": True, "status": status.value if status else None})

    @app.route(
        "/api/logs/id/<int:log_id>/staff/<int:teacher_id>/toggle",
        methods=["POST"],
        endpoint="attendance_staff_toggle",
    )
    def attendance_staff_toggle(log_id: int, teacher_id: int):
        present = svc.toggle_staff(log_id, teacher_id)
        return jsonify({"success": True, "present": present})
