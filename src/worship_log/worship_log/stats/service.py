from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import DateLike, as_date
from ..common.validators import require_positive_id
from ..core.constants import UNASSIGNED_LABEL
from ..core.exceptions import ValidationError
from ..students.model import Student
from ..students.repository import StudentRepository
from ..worship_logs.repository import WorshipLogRepository


@dataclass(frozen=True)
class StatsReport:
    start: date
    end: date
    total_services: int
    rows: list[dict]


def class_label(student: Student) -> str:
    if student.class_id is None or student.class_grade is None:
        return UNASSIGNED_LABEL
    return f"{student.class_grade.short_label} {student.class_name or ''}".rstrip()


class AttendanceStatsService:
    """Attendance counts and rates over a date range."""

    def __init__(
        self,
        logs: WorshipLogRepository,
        students: StudentRepository,
        attendance: AttendanceRepository,
    ):
        self._logs = logs
        self._students = students
        self._attendance = attendance

    def _range(self, start: DateLike, end: DateLike) -> tuple[date, date]:
        start_d, end_d = as_date(start), as_date(end)
        if start_d > end_d:
            raise ValidationError("Start date must not be after end date")
        return start_d, end_d

    def build(self, *, start: DateLike, end: DateLike) -> StatsReport:
        start_d, end_d = self._range(start, end)
        logs = self._logs.list_range(start=start_d, end=end_d)
        total = len(logs)
        if total == 0:
            return StatsReport(start=start_d, end=end_d, total_services=0, rows=[])

        counts = self._attendance.count_by_student(log.log_id for log in logs)

        rows: list[dict] = []
        for s in self._students.list_active():
            present = int(counts.get(s.student_id, 0))
            rate = present / total * 100
            rows.append(
                {
                    "student_id": s.student_id,
                    "name": s.name,
                    "class_label": class_label(s),
                    "present": present,
                    "rate": f"{rate:.1f}",
                    "is_perfect": present == total,
                }
            )

        rows.sort(key=lambda r: float(r["rate"]), reverse=True)
        return StatsReport(start=start_d, end=end_d, total_services=total, rows=rows)

    def student_detail(self, student_id: int, *, start: DateLike, end: DateLike) -> list[dict]:
        """Every service in range, newest first, with whether the student attended."""
        student_id = require_positive_id(student_id, "Student")
        start_d, end_d = self._range(start, end)
        logs = self._logs.list_range(start=start_d, end=end_d, newest_first=True)
        attended = self._attendance.log_ids_for_student(student_id, [log.log_id for log in logs])
        return [
            {
                "log_id": log.log_id,
                "date": log.log_date.strftime("%Y-%m-%d"),
                "present": log.log_id in attended,
            }
            for log in logs
        ]
