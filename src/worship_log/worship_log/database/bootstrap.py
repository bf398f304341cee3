"""Create the database and apply ``database/schema.sql``.

Every statement in the schema is ``IF NOT EXISTS``, so applying it on each
start is harmless.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

# The configured database wins over whatever name the file was written for.
_DATABASE_STATEMENT = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def split_statements(sql: str) -> Iterator[str]:
    """Yield the statements of a schema file.

    ``--`` comment lines are dropped and a ``;`` only ends a statement outside
    single quotes (ENUM values and defaults are quoted).
    """
    lines = [line for line in sql.splitlines() if not line.lstrip().startswith("--")]
    current: list[str] = []
    quoted = False
    for ch in "\n".join(lines):
        if ch == "'":
            quoted = not quoted
        if ch == ";" and not quoted:
            statement = "".join(current).strip()
            if statement:
                yield statement
            current = []
            continue
        current.append(ch)
    rest = "".join(current).strip()
    if rest:
        yield rest


def schema_statements(schema_path: str | Path) -> list[str]:
    text = Path(schema_path).read_text(encoding="utf-8")
    return [s for s in split_statements(text) if not _DATABASE_STATEMENT.match(s)]


def ensure_database_exists(db_config: dict) -> None:
    db = DatabaseConnection(DBConfig.from_dict(db_config))
    conn = db.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{db.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    statements = schema_statements(schema_path)
    ensure_database_exists(db_config)

    db = DatabaseConnection(DBConfig.from_dict(db_config))
    conn = db.connect()
    try:
        cur = conn.cursor()
        for statement in statements:
            cur.execute(statement)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema %s applied to %s (%s statements)", Path(schema_path).name, db.config.database, len(statements))


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
