from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import TeacherRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Teacher
from .repository import TeacherRepository


def _to_teacher(r: dict) -> Teacher:
    return Teacher(
        teacher_id=int(r["teacher_id"]),
        name=r["name"],
        role=TeacherRole(r["role"]),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLTeacherRepository(TeacherRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT teacher_id, name, role, is_active FROM teachers WHERE teacher_id=%s", (int(teacher_id),))
            r = fetchone(cur)
            return _to_teacher(r) if r else None

    def list_active(self) -> Sequence[Teacher]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT teacher_id, name, role, is_active FROM teachers WHERE is_active=1 ORDER BY role, name")
            return [_to_teacher(r) for r in fetchall(cur)]

    def create_teacher(self, *, name: str, role: TeacherRole) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO teachers(name, role, is_active) VALUES(%s,%s,1)", (name, role.value))
            return int(cur.lastrowid)

    def set_active(self, teacher_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE teachers SET is_active=%s WHERE teacher_id=%s", (1 if is_active else 0, int(teacher_id)))
            return cur.rowcount > 0
