from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Grade
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Class
from .repository import ClassRepository

_SELECT = """
    SELECT c.class_id, c.grade, c.name, c.teacher_id, t.name AS teacher_name
    FROM classes c
    LEFT JOIN teachers t ON t.teacher_id = c.teacher_id
"""


def _to_class(r: dict) -> Class:
    return Class(
        class_id=int(r["class_id"]),
        grade=Grade(r["grade"]),
        name=r["name"],
        teacher_id=int(r["teacher_id"]) if r.get("teacher_id") is not None else None,
        teacher_name=r.get("teacher_name"),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: int) -> Optional[Class]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE c.class_id=%s", (int(class_id),))
            r = fetchone(cur)
            return _to_class(r) if r else None

    def list_all(self, *, grade: Optional[Grade] = None) -> Sequence[Class]:
        with db_cursor(self._conn_factory) as (_, cur):
            if grade is None:
                cur.execute(_SELECT + " ORDER BY c.grade DESC, c.name")
            else:
                cur.execute(_SELECT + " WHERE c.grade=%s ORDER BY c.name", (grade.value,))
            return [_to_class(r) for r in fetchall(cur)]

    def create_class(self, *, grade: Grade, name: str, teacher_id: Optional[int] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO classes(grade, name, teacher_id) VALUES(%s,%s,%s)",
                (grade.value, name, teacher_id),
            )
            return int(cur.lastrowid)

    def delete(self, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE class_id=%s", (int(class_id),))
            return cur.rowcount > 0
