from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import student_to_dict
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.student_service

    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    def students_list():
        students = svc.list_active()
        return jsonify({"success": True, "students": [student_to_dict(s) for s in students]})

    @app.route("/api/students", methods=["POST"], endpoint="students_add")
    def students_add():
        data = request.get_json(silent=True) or {}
        confirmed = bool(data.get("confirm_duplicate"))

        result = svc.add_student(
            data.get("name", ""),
            class_id=data.get("class_id") or None,
            tags=data.get("tags") or (),
            reference_date=data.get("date") or None,
            confirm=lambda prompt: confirmed,
        )
        renamed = result.renamed
        return (
            jsonify(
                {
                    "success": True,
                    "student_id": result.student_id,
                    "name": result.name,
                    "outcome": result.plan.outcome.value,
                    "renamed": (
                        {"student_id": renamed.student_id, "old_name": renamed.old_name, "new_name": renamed.new_name}
                        if renamed
                        else None
                    ),
                    "notices": list(result.notices),
                }
            ),
            201,
        )

    @app.route("/api/students/<int:student_id>", methods=["PATCH"], endpoint="students_rename")
    def students_rename(student_id: int):
        data = request.get_json(silent=True) or {}
        svc.rename_student(student_id, data.get("name", ""))
        return jsonify({"success": True, "student": student_to_dict(svc.get(student_id))})

    @app.route("/api/students/<int:student_id>/deactivate", methods=["POST"], endpoint="students_deactivate")
    def students_deactivate(student_id: int):
        svc.soft_delete(student_id)
        return jsonify({"success": True})

    @app.route("/api/students/<int:student_id>", methods=["DELETE"], endpoint="students_delete")
    def students_delete(student_id: int):
        svc.delete_student(student_id)
        return jsonify({"success": True})
