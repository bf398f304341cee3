from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import TeacherRole


@dataclass(frozen=True)
class Teacher:
    teacher_id: int
    name: str
    role: TeacherRole = TeacherRole.TEACHER
    is_active: bool = True
