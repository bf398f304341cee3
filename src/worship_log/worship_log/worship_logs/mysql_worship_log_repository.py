from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date
from .model import WorshipLog
from .repository import WorshipLogRepository

_COLUMNS = (
    "prayer",
    "prayer_role",
    "sermon_title",
    "sermon_text",
    "preacher",
    "coupon_recipient_count",
    "coupons_per_person",
    "online_attendance_count",
    "online_attendance_names",
)

_SELECT = "SELECT log_id, log_date, " + ", ".join(_COLUMNS) + " FROM worship_logs"


def _to_log(r: dict) -> WorshipLog:
    return WorshipLog(
        log_id=int(r["log_id"]),
        log_date=normalize_mysql_date(r["log_date"]),
        prayer=r.get("prayer"),
        prayer_role=r.get("prayer_role"),
        sermon_title=r.get("sermon_title"),
        sermon_text=r.get("sermon_text"),
        preacher=r.get("preacher"),
        coupon_recipient_count=int(r.get("coupon_recipient_count") or 0),
        coupons_per_person=int(r.get("coupons_per_person") or 0),
        online_attendance_count=int(r.get("online_attendance_count") or 0),
        online_attendance_names=r.get("online_attendance_names"),
    )


class MySQLWorshipLogRepository(WorshipLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, log_id: int) -> Optional[WorshipLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE log_id=%s", (int(log_id),))
            r = fetchone(cur)
            return _to_log(r) if r else None

    def get_by_date(self, log_date: date) -> Optional[WorshipLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE log_date=%s", (log_date,))
            r = fetchone(cur)
            return _to_log(r) if r else None

    def upsert_for_date(self, log_date: date, *, fields: Mapping[str, Any]) -> int:
        unknown = set(fields) - set(_COLUMNS)
        if unknown:
            raise ValueError(f"Unsupported worship log fields: {sorted(unknown)}")

        columns = [c for c in _COLUMNS if c in fields]
        values = [fields[c] for c in columns]
        insert_cols = ", ".join(["log_date", *columns])
        placeholders = ", ".join(["%s"] * (len(columns) + 1))
        # LAST_INSERT_ID(log_id) makes lastrowid point at the existing row on update.
        updates = ", ".join([f"{c}=VALUES({c})" for c in columns] + ["log_id=LAST_INSERT_ID(log_id)"])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO worship_logs({insert_cols})
                VALUES({placeholders})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                (log_date, *values),
            )
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute("SELECT log_id FROM worship_logs WHERE log_date=%s", (log_date,))
            r = fetchone(cur)
            return int(r["log_id"]) if r else 0

    def list_range(self, *, start: Optional[date] = None, end: Optional[date] = None, newest_first: bool = True) -> Sequence[WorshipLog]:
        clauses: list[str] = []
        params: list[object] = []
        if start is not None:
            clauses.append("log_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("log_date <= %s")
            params.append(end)
        where = (" WHERE " + " AND ".join(clauses)) if clauses else ""
        order = "DESC" if newest_first else "ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT}{where} ORDER BY log_date {order}", tuple(params))
            return [_to_log(r) for r in fetchall(cur)]

    def delete(self, log_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM worship_logs WHERE log_id=%s", (int(log_id),))
            return cur.rowcount > 0
