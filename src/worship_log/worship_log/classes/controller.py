from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import class_to_dict
from ..container import Container
from .service import parse_grade


def register(app: Flask, container: Container) -> None:
    svc = container.class_service

    @app.route("/api/classes", methods=["GET"], endpoint="classes_list")
    def classes_list():
        grade_s = request.args.get("grade")
        classes = svc.list_classes(parse_grade(grade_s) if grade_s else None)
        return jsonify({"success": True, "classes": [class_to_dict(c) for c in classes]})

    @app.route("/api/classes", methods=["POST"], endpoint="classes_add")
    def classes_add():
        data = request.get_json(silent=True) or {}
        class_id = svc.create_class(
            grade=data.get("grade"),
            name=data.get("name", ""),
            teacher_id=data.get("teacher_id") or None,
        )
        return jsonify({"success": True, "class": class_to_dict(svc.get(class_id))}), 201

    @app.route("/api/classes/<int:class_id>", methods=["DELETE"], endpoint="classes_delete")
    def classes_delete(class_id: int):
        svc.delete_class(class_id)
        return jsonify({"success": True})
