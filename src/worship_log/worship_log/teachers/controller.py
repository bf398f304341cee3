from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import teacher_to_dict
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.teacher_service

    @app.route("/api/teachers", methods=["GET"], endpoint="teachers_list")
    def teachers_list():
        return jsonify({"success": True, "teachers": [teacher_to_dict(t) for t in svc.list_active()]})

    @app.route("/api/teachers", methods=["POST"], endpoint="teachers_add")
    def teachers_add():
        data = request.get_json(silent=True) or {}
        teacher_id = svc.add_teacher(name=data.get("name", ""), role=data.get("role") or "Teacher")
        return jsonify({"success": True, "teacher_id": teacher_id}), 201

    @app.route("/api/teachers/<int:teacher_id>/deactivate", methods=["POST"], endpoint="teachers_deactivate")
    def teachers_deactivate(teacher_id: int):
        svc.deactivate(teacher_id)
        return jsonify({"success": True})
