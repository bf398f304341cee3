from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    """Store port for students.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_by_name_prefix(self, prefix: str, *, active_only: bool = True) -> Sequence[Student]:
        """Students whose name starts with ``prefix`` (literal, no wildcards)."""

        raise NotImplementedError

    def list_active(
        self,
        *,
        class_id: Optional[int] = None,
        tag: Optional[str] = None,
        with_first_visit: bool = False,
    ) -> Sequence[Student]:
        """Active students, optionally in one class.

        ``tag`` and ``with_first_visit`` combine with OR: tagged students and
        students with a recorded first visit.
        """

        raise NotImplementedError

    def create_student(
        self,
        *,
        name: str,
        class_id: Optional[int],
        tags: Sequence[str] = (),
        first_visit_date: Optional[date] = None,
    ) -> int:
        raise NotImplementedError

    def rename(self, student_id: int, *, new_name: str) -> bool:
        raise NotImplementedError

    def update_fields(self, student_id: int, *, changes: Mapping[str, Any]) -> bool:
        """Write ``class_id``/``tags``/``first_visit_date``/``class_assigned_date`` in one statement."""

        raise NotImplementedError

    def set_active(self, student_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def delete_by_id(self, student_id: int) -> bool:
        """Hard delete; attendance rows go with it."""

        raise NotImplementedError
