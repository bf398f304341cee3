from __future__ import annotations

from flask import Flask, jsonify

from ..common.serializers import class_to_dict, log_to_dict, offering_to_dict, student_to_dict, teacher_to_dict
from ..container import Container
from ..core.enums import Grade
from .service import RosterBlock


def _block_to_dict(block: RosterBlock) -> dict:
    return {
        "label": block.label,
        "class": class_to_dict(block.cls) if block.cls else None,
        "enrolled": block.enrolled,
        "attended": block.attended,
        "students": [
            dict(student_to_dict(e.student), status=e.status.value if e.status else None)
            for e in block.entries
        ],
    }


def register(app: Flask, container: Container) -> None:
    svc = container.snapshot_service

    @app.route("/api/logs/<log_date>/snapshot", methods=["GET"], endpoint="reports_snapshot")
    def reports_snapshot(log_date: str):
        snap = svc.build(log_date)
        return jsonify(
            {
                "success": True,
                "log": log_to_dict(snap.log),
                "classes": [_block_to_dict(b) for b in snap.classes],
                "new_friends": _block_to_dict(snap.new_friends),
                "grade_totals": {g.value: list(snap.grade_totals(g)) for g in Grade},
                "teachers_present": [teacher_to_dict(t) for t in snap.teachers_present],
                "staff_present": [teacher_to_dict(t) for t in snap.staff_present],
                "offerings": [offering_to_dict(o) for o in snap.offerings],
                "offering_total": snap.offering_total,
            }
        )
