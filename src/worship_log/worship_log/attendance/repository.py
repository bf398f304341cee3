from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceMark


class AttendanceRepository(Protocol):
    """Student and staff attendance per worship log (at most one row per pair)."""

    def list_for_log(self, log_id: int) -> Sequence[AttendanceMark]:
        raise NotImplementedError

    def get(self, *, log_id: int, student_id: int) -> Optional[AttendanceMark]:
        raise NotImplementedError

    def upsert_status(self, *, log_id: int, student_id: int, status: AttendanceStatus) -> None:
        raise NotImplementedError

    def delete_mark(self, *, log_id: int, student_id: int) -> bool:
        raise NotImplementedError

    def count_for_student(self, student_id: int) -> int:
        raise NotImplementedError

    def count_by_student(self, log_ids: Iterable[int]) -> dict[int, int]:
        """Attendance rows per student over the given logs."""

        raise NotImplementedError

    def log_ids_for_student(self, student_id: int, log_ids: Iterable[int]) -> set[int]:
        raise NotImplementedError

    def staff_present(self, log_id: int) -> set[int]:
        raise NotImplementedError

    def set_staff_present(self, *, log_id: int, teacher_id: int, present: bool) -> None:
        raise NotImplementedError
