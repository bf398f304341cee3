from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.serializers import offering_to_dict
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.offering_service

    @app.route("/api/logs/id/<int:log_id>/offerings", methods=["GET"], endpoint="offerings_list")
    def offerings_list(log_id: int):
        rows = svc.list_for_log(log_id)
        return jsonify(
            {
                "success": True,
                "offerings": [offering_to_dict(o) for o in rows],
                "total": sum(o.amount for o in rows),
            }
        )

    @app.route("/api/logs/id/<int:log_id>/offerings/<offering_type>", methods=["PUT"], endpoint="offerings_update")
    def offerings_update(log_id: int, offering_type: str):
        data = request.get_json(silent=True) or {}
        offering = svc.update(log_id, offering_type, amount=data.get("amount"), memo=data.get("memo"))
        return jsonify({"success": True, "offering": offering_to_dict(offering)})
