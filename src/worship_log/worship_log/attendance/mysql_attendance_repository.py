from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceMark
from .repository import AttendanceRepository


def _in_clause(ids: list[int]) -> str:
    return ", ".join(["%s"] * len(ids))


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_log(self, log_id: int) -> Sequence[AttendanceMark]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT log_id, student_id, status FROM attendance WHERE log_id=%s", (int(log_id),))
            return [
                AttendanceMark(
                    log_id=int(r["log_id"]),
                    student_id=int(r["student_id"]),
                    status=AttendanceStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]

    def get(self, *, log_id: int, student_id: int) -> Optional[AttendanceMark]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT log_id, student_id, status FROM attendance WHERE log_id=%s AND student_id=%s",
                (int(log_id), int(student_id)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceMark(log_id=int(r["log_id"]), student_id=int(r["student_id"]), status=AttendanceStatus(r["status"]))

    def upsert_status(self, *, log_id: int, student_id: int, status: AttendanceStatus) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(log_id, student_id, status)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status)
                """,
                (int(log_id), int(student_id), status.value),
            )

    def delete_mark(self, *, log_id: int, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance WHERE log_id=%s AND student_id=%s", (int(log_id), int(student_id)))
            return cur.rowcount > 0

    def count_for_student(self, student_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def count_by_student(self, log_ids: Iterable[int]) -> dict[int, int]:
        ids = [int(i) for i in log_ids]
        if not ids:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT student_id, COUNT(*) AS n
                FROM attendance
                WHERE log_id IN ({_in_clause(ids)})
                GROUP BY student_id
                """,
                tuple(ids),
            )
            return {int(r["student_id"]): int(r["n"]) for r in fetchall(cur)}

    def log_ids_for_student(self, student_id: int, log_ids: Iterable[int]) -> set[int]:
        ids = [int(i) for i in log_ids]
        if not ids:
            return set()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT log_id FROM attendance WHERE student_id=%s AND log_id IN ({_in_clause(ids)})",
                (int(student_id), *ids),
            )
            return {int(r["log_id"]) for r in fetchall(cur)}

    def staff_present(self, log_id: int) -> set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT teacher_id FROM teacher_attendance WHERE log_id=%s AND is_present=1",
                (int(log_id),),
            )
            return {int(r["teacher_id"]) for r in fetchall(cur)}

    def set_staff_present(self, *, log_id: int, teacher_id: int, present: bool) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            if present:
                cur.execute(
                    """
                    INSERT INTO teacher_attendance(log_id, teacher_id, is_present)
                    VALUES(%s,%s,1)
                    ON DUPLICATE KEY UPDATE is_present=1
                    """,
                    (int(log_id), int(teacher_id)),
                )
            else:
                cur.execute(
                    "DELETE FROM teacher_attendance WHERE log_id=%s AND teacher_id=%s",
                    (int(log_id), int(teacher_id)),
                )
