from __future__ import annotations

from typing import Sequence

from ..common.validators import require_non_empty, require_positive_id
from ..core.enums import TeacherRole
from ..core.exceptions import ValidationError
from .model import Teacher
from .repository import TeacherRepository


class TeacherService:
    def __init__(self, teachers: TeacherRepository):
        self._teachers = teachers

    def list_active(self) -> Sequence[Teacher]:
        return self._teachers.list_active()

    def add_teacher(self, *, name: str, role=TeacherRole.TEACHER) -> int:
        name = require_non_empty(name, "Teacher name")
        try:
            role = TeacherRole(role)
        except ValueError:
            raise ValidationError(f"Unknown staff role: {role!r}") from None
        return self._teachers.create_teacher(name=name, role=role)

    def deactivate(self, teacher_id: int) -> None:
        if not self._teachers.set_active(require_positive_id(teacher_id, "Teacher"), is_active=False):
            raise ValidationError("Teacher does not exist")
