from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import UNASSIGNED_LABEL
from ..core.enums import Grade, StudentTag


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on the youth-group roster.

    ``class_id`` is None for unassigned students. ``class_grade`` and
    ``class_name`` are read-only join columns filled by list queries.
    """

    student_id: int
    name: str
    class_id: Optional[int] = None
    tags: tuple[str, ...] = ()
    first_visit_date: Optional[date] = None
    class_assigned_date: Optional[date] = None
    is_active: bool = True
    class_grade: Optional[Grade] = None
    class_name: Optional[str] = None

    def has_tag(self, tag: StudentTag | str) -> bool:
        value = tag.value if isinstance(tag, StudentTag) else tag
        return value in self.tags

    @property
    def is_new_friend(self) -> bool:
        return self.has_tag(StudentTag.NEW_FRIEND)

    @property
    def placement_label(self) -> str:
        """E.g. ``중등-1반`` or ``미배정`` for unassigned students."""
        if self.class_id is None or self.class_grade is None:
            return UNASSIGNED_LABEL
        if not self.class_name:
            return self.class_grade.label
        return f"{self.class_grade.label}-{self.class_name}"


def with_tag(tags: tuple[str, ...], tag: StudentTag | str) -> tuple[str, ...]:
    value = tag.value if isinstance(tag, StudentTag) else tag
    return tags if value in tags else tags + (value,)


def without_tag(tags: tuple[str, ...], tag: StudentTag | str) -> tuple[str, ...]:
    value = tag.value if isinstance(tag, StudentTag) else tag
    return tuple(t for t in tags if t != value)
