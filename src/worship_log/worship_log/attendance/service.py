from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_positive_id
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..worship_logs.model import WorshipLog
from ..worship_logs.repository import WorshipLogRepository
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: check students and staff in for a saved worship log."""

    def __init__(self, attendance: AttendanceRepository, logs: WorshipLogRepository):
        self._attendance = attendance
        self._logs = logs

    def _require_log(self, log_id: Optional[int]) -> WorshipLog:
        if not log_id:
            raise ValidationError("Save the worship info for this date first")
        log = self._logs.get_by_id(require_positive_id(log_id, "Worship log"))
        if not log:
            raise ValidationError("Worship log does not exist")
        return log

    def marks_for_log(self, log_id: int) -> dict[int, AttendanceStatus]:
        log = self._require_log(log_id)
        return {m.student_id: m.status for m in self._attendance.list_for_log(log.log_id)}

    def toggle(self, log_id: Optional[int], student_id: int) -> bool:
        """Flip a student between present and absent. Returns the new state."""
        log = self._require_log(log_id)
        student_id = require_positive_id(student_id, "Student")

        if self._attendance.get(log_id=log.log_id, student_id=student_id):
            self._attendance.delete_mark(log_id=log.log_id, student_id=student_id)
            return False

        self._attendance.upsert_status(log_id=log.log_id, student_id=student_id, status=AttendanceStatus.PRESENT)
        return True

    def set_status(self, log_id: Optional[int], student_id: int, status: Optional[AttendanceStatus]) -> None:
        """Record ``present``/``online``; ``None`` clears the mark."""
        log = self._require_log(log_id)
        student_id = require_positive_id(student_id, "Student")

        if status is None:
            self._attendance.delete_mark(log_id=log.log_id, student_id=student_id)
            return
        self._attendance.upsert_status(log_id=log.log_id, student_id=student_id, status=AttendanceStatus(status))

    def staff_present(self, log_id: int) -> set[int]:
        log = self._require_log(log_id)
        return self._attendance.staff_present(log.log_id)

    def toggle_staff(self, log_id: Optional[int], teacher_id: int) -> bool:
        log = self._require_log(log_id)
        teacher_id = require_positive_id(teacher_id, "Teacher")

        present = teacher_id not in self._attendance.staff_present(log.log_id)
        self._attendance.set_staff_present(log_id=log.log_id, teacher_id=teacher_id, present=present)
        logger.debug("staff %s on log %s -> %s", teacher_id, log.log_id, present)
        return present
