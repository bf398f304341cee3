from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceMark:
    """A student's attendance at one service. Absence is the missing row."""

    log_id: int
    student_id: int
    status: AttendanceStatus = AttendanceStatus.PRESENT
