from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

import pytest

from src.worship_log.worship_log.attendance.model import AttendanceMark
from src.worship_log.worship_log.classes.model import Class
from src.worship_log.worship_log.core.enums import AttendanceStatus, Grade, TeacherRole
from src.worship_log.worship_log.offerings.model import Offering
from src.worship_log.worship_log.students.model import Student
from src.worship_log.worship_log.teachers.model import Teacher
from src.worship_log.worship_log.worship_logs.model import WorshipLog


class InMemoryStudents:
    def __init__(self, students=(), *, classes: Optional[dict[int, Class]] = None):
        self._by_id: dict[int, Student] = {s.student_id: s for s in students}
        self._next_id = max(self._by_id, default=0) + 1
        self._classes = classes if classes is not None else {}
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()

    def _joined(self, s: Student) -> Student:
        cls = self._classes.get(s.class_id) if s.class_id is not None else None
        return replace(s, class_grade=cls.grade if cls else None, class_name=cls.name if cls else None)

    def _maybe_fail(self, op: str) -> None:
        if op in self.fail_on:
            raise RuntimeError(f"{op} failed")

    def get_by_id(self, student_id: int) -> Optional[Student]:
        s = self._by_id.get(student_id)
        return self._joined(s) if s else None

    def list_by_name_prefix(self, prefix: str, *, active_only: bool = True):
        out = [s for s in self._by_id.values() if s.name.startswith(prefix)]
        if active_only:
            out = [s for s in out if s.is_active]
        return [self._joined(s) for s in sorted(out, key=lambda s: s.name)]

    def list_active(self, *, class_id: Optional[int] = None, tag: Optional[str] = None, with_first_visit: bool = False):
        out = [s for s in self._by_id.values() if s.is_active]
        if class_id is not None:
            out = [s for s in out if s.class_id == class_id]
        if tag is not None or with_first_visit:
            out = [
                s
                for s in out
                if (tag is not None and tag in s.tags) or (with_first_visit and s.first_visit_date is not None)
            ]
        return [self._joined(s) for s in sorted(out, key=lambda s: s.name)]

    def create_student(self, *, name, class_id, tags=(), first_visit_date=None) -> int:
        self.calls.append(("create", name))
        self._maybe_fail("create")
        sid = self._next_id
        self._next_id += 1
        self._by_id[sid] = Student(
            student_id=sid,
            name=name,
            class_id=class_id,
            tags=tuple(tags),
            first_visit_date=first_visit_date,
        )
        return sid

    def rename(self, student_id: int, *, new_name: str) -> bool:
        self.calls.append(("rename", student_id, new_name))
        self._maybe_fail("rename")
        s = self._by_id.get(student_id)
        if not s:
            return False
        self._by_id[student_id] = replace(s, name=new_name)
        return True

    def update_fields(self, student_id: int, *, changes) -> bool:
        self.calls.append(("update", student_id, dict(changes)))
        self._maybe_fail("update")
        s = self._by_id.get(student_id)
        if not s:
            return False
        self._by_id[student_id] = replace(s, **dict(changes))
        return True

    def set_active(self, student_id: int, *, is_active: bool) -> bool:
        s = self._by_id.get(student_id)
        if not s:
            return False
        self._by_id[student_id] = replace(s, is_active=is_active)
        return True

    def delete_by_id(self, student_id: int) -> bool:
        self.calls.append(("delete", student_id))
        return self._by_id.pop(student_id, None) is not None

    def names(self) -> list[str]:
        return sorted(s.name for s in self._by_id.values())

    def by_name(self, name: str) -> Student:
        return next(s for s in self._by_id.values() if s.name == name)


class InMemoryClasses:
    def __init__(self, classes=()):
        self.by_id: dict[int, Class] = {c.class_id: c for c in classes}
        self._next_id = max(self.by_id, default=0) + 1

    def get_by_id(self, class_id: int):
        return self.by_id.get(class_id)

    def list_all(self, *, grade=None):
        out = list(self.by_id.values())
        if grade is not None:
            out = [c for c in out if c.grade == grade]
        return sorted(out, key=lambda c: c.name)

    def create_class(self, *, grade, name, teacher_id=None) -> int:
        cid = self._next_id
        self._next_id += 1
        self.by_id[cid] = Class(class_id=cid, grade=grade, name=name, teacher_id=teacher_id)
        return cid

    def delete(self, class_id: int) -> bool:
        return self.by_id.pop(class_id, None) is not None


class InMemoryTeachers:
    def __init__(self, teachers=()):
        self._by_id: dict[int, Teacher] = {t.teacher_id: t for t in teachers}
        self._next_id = max(self._by_id, default=0) + 1

    def get_by_id(self, teacher_id: int):
        return self._by_id.get(teacher_id)

    def list_active(self):
        return [t for t in self._by_id.values() if t.is_active]

    def create_teacher(self, *, name, role) -> int:
        tid = self._next_id
        self._next_id += 1
        self._by_id[tid] = Teacher(teacher_id=tid, name=name, role=role)
        return tid

    def set_active(self, teacher_id: int, *, is_active: bool) -> bool:
        t = self._by_id.get(teacher_id)
        if not t:
            return False
        self._by_id[teacher_id] = replace(t, is_active=is_active)
        return True


class InMemoryLogs:
    def __init__(self, logs=()):
        self._by_id: dict[int, WorshipLog] = {log.log_id: log for log in logs}
        self._next_id = max(self._by_id, default=0) + 1

    def get_by_id(self, log_id: int):
        return self._by_id.get(log_id)

    def get_by_date(self, log_date: date):
        return next((log for log in self._by_id.values() if log.log_date == log_date), None)

    def upsert_for_date(self, log_date: date, *, fields) -> int:
        existing = self.get_by_date(log_date)
        if existing:
            self._by_id[existing.log_id] = replace(existing, **dict(fields))
            return existing.log_id
        lid = self._next_id
        self._next_id += 1
        self._by_id[lid] = WorshipLog(log_id=lid, log_date=log_date, **dict(fields))
        return lid

    def list_range(self, *, start=None, end=None, newest_first=True):
        out = [
            log
            for log in self._by_id.values()
            if (start is None or log.log_date >= start) and (end is None or log.log_date <= end)
        ]
        return sorted(out, key=lambda log: log.log_date, reverse=newest_first)

    def delete(self, log_id: int) -> bool:
        return self._by_id.pop(log_id, None) is not None


class InMemoryAttendance:
    def __init__(self):
        self.marks: dict[tuple[int, int], AttendanceStatus] = {}
        self.staff: set[tuple[int, int]] = set()

    def list_for_log(self, log_id: int):
        return [AttendanceMark(log_id=l, student_id=s, status=st) for (l, s), st in self.marks.items() if l == log_id]

    def get(self, *, log_id: int, student_id: int):
        st = self.marks.get((log_id, student_id))
        return AttendanceMark(log_id=log_id, student_id=student_id, status=st) if st else None

    def upsert_status(self, *, log_id: int, student_id: int, status: AttendanceStatus) -> None:
        self.marks[(log_id, student_id)] = status

    def delete_mark(self, *, log_id: int, student_id: int) -> bool:
        return self.marks.pop((log_id, student_id), None) is not None

    def count_for_student(self, student_id: int) -> int:
        return sum(1 for (_, s) in self.marks if s == student_id)

    def count_by_student(self, log_ids) -> dict[int, int]:
        ids = set(log_ids)
        out: dict[int, int] = {}
        for (l, s) in self.marks:
            if l in ids:
                out[s] = out.get(s, 0) + 1
        return out

    def log_ids_for_student(self, student_id: int, log_ids) -> set[int]:
        ids = set(log_ids)
        return {l for (l, s) in self.marks if s == student_id and l in ids}

    def staff_present(self, log_id: int) -> set[int]:
        return {t for (l, t) in self.staff if l == log_id}

    def set_staff_present(self, *, log_id: int, teacher_id: int, present: bool) -> None:
        if present:
            self.staff.add((log_id, teacher_id))
        else:
            self.staff.discard((log_id, teacher_id))


class InMemoryOfferings:
    def __init__(self):
        self.rows: dict[tuple[int, str], Offering] = {}

    def list_for_log(self, log_id: int):
        return [o for (l, _), o in self.rows.items() if l == log_id]

    def upsert(self, *, log_id: int, offering_type: str, amount: int, memo) -> None:
        self.rows[(log_id, offering_type)] = Offering(log_id=log_id, offering_type=offering_type, amount=amount, memo=memo)


@pytest.fixture
def middle_class() -> Class:
    return Class(class_id=1, grade=Grade.MIDDLE, name="1반")


@pytest.fixture
def high_class() -> Class:
    return Class(class_id=2, grade=Grade.HIGH, name="2반")


@pytest.fixture
def classes_repo(middle_class, high_class) -> InMemoryClasses:
    return InMemoryClasses([middle_class, high_class])


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def teachers_repo() -> InMemoryTeachers:
    return InMemoryTeachers(
        [
            Teacher(teacher_id=1, name="Lee", role=TeacherRole.TEACHER),
            Teacher(teacher_id=2, name="Choi", role=TeacherRole.STAFF),
        ]
    )


@pytest.fixture
def fixed_today() -> date:
    return date(2024, 3, 10)
