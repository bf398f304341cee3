from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Offering
from .repository import OfferingRepository


class MySQLOfferingRepository(OfferingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_log(self, log_id: int) -> Sequence[Offering]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT log_id, offering_type, amount, memo FROM offerings WHERE log_id=%s", (int(log_id),))
            return [
                Offering(
                    log_id=int(r["log_id"]),
                    offering_type=r["offering_type"],
                    amount=int(r.get("amount") or 0),
                    memo=r.get("memo"),
                )
                for r in fetchall(cur)
            ]

    def upsert(self, *, log_id: int, offering_type: str, amount: int, memo: Optional[str]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO offerings(log_id, offering_type, amount, memo)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE amount=VALUES(amount), memo=VALUES(memo)
                """,
                (int(log_id), offering_type, int(amount), memo),
            )
