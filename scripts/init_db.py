"""Create the configured database and apply database/schema.sql.

Usage: ``APP_ENV=development python scripts/init_db.py``
"""
from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module  # noqa: E402

from src.worship_log.worship_log.database.bootstrap import apply_schema, list_tables  # noqa: E402

logger = logging.getLogger("init_db")


def main() -> int:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    settings_module = get_settings_module()
    db_config = dict(importlib.import_module(settings_module).DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    logger.info("%s: database %s ready with tables %s", settings_module, db_config.get("database"), ", ".join(tables))
    return 0


if __name__ == "__main__":
    sys.exit(main())
