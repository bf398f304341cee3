from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.serializers import changes_to_dict, student_to_dict
from ..container import Container
from .service import TransitionResult


def _result_json(result: TransitionResult):
    return jsonify(
        {
            "success": True,
            "student_id": result.student_id,
            "changes": changes_to_dict(result.changes),
            "warnings": list(result.warnings),
        }
    )


def register(app: Flask, container: Container) -> None:
    svc = container.roster_service

    def _reference_date():
        return request.args.get("date") or today_local()

    @app.route("/api/classes/<int:class_id>/roster", methods=["GET"], endpoint="roster_class")
    def roster_class(class_id: int):
        students = svc.class_roster(class_id, _reference_date())
        return jsonify({"success": True, "students": [student_to_dict(s) for s in students]})

    @app.route("/api/roster/new-friends", methods=["GET"], endpoint="roster_new_friends")
    def roster_new_friends():
        students = svc.new_friend_roster(_reference_date())
        return jsonify({"success": True, "students": [student_to_dict(s) for s in students]})

    @app.route("/api/students/<int:student_id>/new-friend", methods=["POST"], endpoint="roster_tag_new_friend")
    def roster_tag_new_friend(student_id: int):
        data = request.get_json(silent=True) or {}
        return _result_json(svc.tag_new_friend(student_id, data.get("date") or today_local()))

    @app.route("/api/students/<int:student_id>/assign", methods=["POST"], endpoint="roster_assign")
    def roster_assign(student_id: int):
        data = request.get_json(silent=True) or {}
        return _result_json(svc.assign_to_class(student_id, data.get("class_id"), data.get("date") or None))

    @app.route("/api/students/<int:student_id>/unassign", methods=["POST"], endpoint="roster_unassign")
    def roster_unassign(student_id: int):
        return _result_json(svc.remove_from_class(student_id))

    @app.route("/api/students/<int:student_id>/tags/<tag>", methods=["DELETE"], endpoint="roster_remove_tag")
    def roster_remove_tag(student_id: int, tag: str):
        return _result_json(svc.remove_tag(student_id, tag))
