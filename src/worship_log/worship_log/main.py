from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .classes.controller import register as register_classes
from .container import Container, build_container
from .core.exceptions import AmbiguousNameDeclined, DomainError, StoreWriteFailure
from .database.bootstrap import apply_schema, list_tables
from .offerings.controller import register as register_offerings
from .reports.controller import register as register_reports
from .roster.controller import register as register_roster
from .stats.controller import register as register_stats
from .students.controller import register as register_students
from .teachers.controller import register as register_teachers
from .worship_logs.controller import register as register_worship_logs

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AmbiguousNameDeclined)
    def _declined(e: AmbiguousNameDeclined):
        return jsonify({"success": False, "needs_confirmation": True, "message": e.prompt}), 409

    @app.errorhandler(StoreWriteFailure)
    def _store_failure(e: StoreWriteFailure):
        logger.error("store write failed during %s: %s", e.operation.value, e)
        return (
            jsonify(
                {
                    "success": False,
                    "operation": e.operation.value,
                    "rolled_back": e.rolled_back,
                    "message": str(e),
                }
            ),
            502,
        )

    @app.errorhandler(DomainError)
    def _domain_error(e: DomainError):
        return jsonify({"success": False, "message": str(e)}), 400


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        container = build_container(db_config=db_config)

    _register_error_handlers(app)

    register_students(app, container)
    register_roster(app, container)
    register_classes(app, container)
    register_teachers(app, container)
    register_worship_logs(app, container)
    register_attendance(app, container)
    register_offerings(app, container)
    register_stats(app, container)
    register_reports(app, container)

    return app
