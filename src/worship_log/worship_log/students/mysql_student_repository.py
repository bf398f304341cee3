from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import Grade
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    decode_json_list,
    encode_json_list,
    escape_like,
    fetchall,
    fetchone,
    normalize_mysql_date,
)
from .model import Student
from .repository import StudentRepository

_SELECT = """
    SELECT s.student_id, s.name, s.class_id, s.tags, s.first_visit_date, s.class_assigned_date, s.is_active,
           c.grade AS class_grade, c.name AS class_name
    FROM students s
    LEFT JOIN classes c ON c.class_id = s.class_id
"""

_UPDATABLE = ("class_id", "tags", "first_visit_date", "class_assigned_date")


def _to_student(row: dict) -> Student:
    grade = row.get("class_grade")
    return Student(
        student_id=int(row["student_id"]),
        name=row["name"],
        class_id=int(row["class_id"]) if row.get("class_id") is not None else None,
        tags=decode_json_list(row.get("tags")),
        first_visit_date=normalize_mysql_date(row.get("first_visit_date")),
        class_assigned_date=normalize_mysql_date(row.get("class_assigned_date")),
        is_active=bool(row.get("is_active", True)),
        class_grade=Grade(grade) if grade else None,
        class_name=row.get("class_name"),
    )


def _exists(cur, student_id: int) -> bool:
    # MySQL reports 0 affected rows when an UPDATE leaves the values unchanged.
    cur.execute("SELECT 1 AS found FROM students WHERE student_id=%s", (int(student_id),))
    return fetchone(cur) is not None


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.student_id=%s", (int(student_id),))
            row = fetchone(cur)
            return _to_student(row) if row else None

    def list_by_name_prefix(self, prefix: str, *, active_only: bool = True) -> Sequence[Student]:
        clauses = ["s.name LIKE %s"]
        if active_only:
            clauses.append("s.is_active=1")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE " + " AND ".join(clauses) + " ORDER BY s.name",
                (escape_like(prefix) + "%",),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def list_active(
        self,
        *,
        class_id: Optional[int] = None,
        tag: Optional[str] = None,
        with_first_visit: bool = False,
    ) -> Sequence[Student]:
        clauses = ["s.is_active=1"]
        params: list[object] = []
        if class_id is not None:
            clauses.append("s.class_id=%s")
            params.append(int(class_id))

        membership: list[str] = []
        if tag is not None:
            membership.append("JSON_CONTAINS(COALESCE(s.tags, JSON_ARRAY()), JSON_QUOTE(%s))")
            params.append(tag)
        if with_first_visit:
            membership.append("s.first_visit_date IS NOT NULL")
        if membership:
            clauses.append("(" + " OR ".join(membership) + ")")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE " + " AND ".join(clauses) + " ORDER BY s.name", tuple(params))
            return [_to_student(r) for r in fetchall(cur)]

    def create_student(
        self,
        *,
        name: str,
        class_id: Optional[int],
        tags: Sequence[str] = (),
        first_visit_date: Optional[date] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, class_id, tags, first_visit_date, is_active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (name, class_id, encode_json_list(tags), first_visit_date),
            )
            return int(cur.lastrowid)

    def rename(self, student_id: int, *, new_name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET name=%s WHERE student_id=%s", (new_name, int(student_id)))
            return cur.rowcount > 0 or _exists(cur, student_id)

    def update_fields(self, student_id: int, *, changes: Mapping[str, Any]) -> bool:
        unknown = set(changes) - set(_UPDATABLE)
        if unknown:
            raise ValueError(f"Unsupported student fields: {sorted(unknown)}")
        if not changes:
            return True

        assignments: list[str] = []
        params: list[object] = []
        for column in _UPDATABLE:
            if column not in changes:
                continue
            value = changes[column]
            if column == "tags":
                value = encode_json_list(value)
            assignments.append(f"{column}=%s")
            params.append(value)
        params.append(int(student_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE students SET {', '.join(assignments)} WHERE student_id=%s", tuple(params))
            return cur.rowcount > 0 or _exists(cur, student_id)

    def set_active(self, student_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET is_active=%s WHERE student_id=%s", (1 if is_active else 0, int(student_id)))
            return cur.rowcount > 0 or _exists(cur, student_id)

    def delete_by_id(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0
