from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Grade


@dataclass(frozen=True)
class Class:
    class_id: int
    grade: Grade
    name: str
    teacher_id: Optional[int] = None
    teacher_name: Optional[str] = None

    @property
    def short_label(self) -> str:
        """E.g. ``중 1반`` as shown in statistics."""
        return f"{self.grade.short_label} {self.name}"
