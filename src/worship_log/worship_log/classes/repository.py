from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Grade
from .model import Class


class ClassRepository(Protocol):
    def get_by_id(self, class_id: int) -> Optional[Class]:
        raise NotImplementedError

    def list_all(self, *, grade: Optional[Grade] = None) -> Sequence[Class]:
        raise NotImplementedError

    def create_class(self, *, grade: Grade, name: str, teacher_id: Optional[int] = None) -> int:
        raise NotImplementedError

    def delete(self, class_id: int) -> bool:
        """Remove a class; its students become unassigned."""

        raise NotImplementedError
