from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import TeacherRole
from .model import Teacher


class TeacherRepository(Protocol):
    def get_by_id(self, teacher_id: int) -> Optional[Teacher]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Teacher]:
        raise NotImplementedError

    def create_teacher(self, *, name: str, role: TeacherRole) -> int:
        raise NotImplementedError

    def set_active(self, teacher_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError
