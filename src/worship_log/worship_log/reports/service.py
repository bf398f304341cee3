"""Fully-resolved data for one service day, as printed on the paper form.

The image renderer only lays this out; every roster decision (who is listed
under which class on that date) is made here through the roster rules.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..classes.model import Class
from ..classes.repository import ClassRepository
from ..common.datetime_utils import DateLike, as_date
from ..core.enums import AttendanceStatus, Grade, TeacherRole
from ..core.exceptions import ValidationError
from ..offerings.model import Offering
from ..offerings.service import OfferingService
from ..roster.service import RosterService
from ..students.model import Student
from ..teachers.repository import TeacherRepository
from ..teachers.model import Teacher
from ..worship_logs.model import WorshipLog
from ..worship_logs.repository import WorshipLogRepository


@dataclass(frozen=True)
class RosterEntry:
    student: Student
    status: Optional[AttendanceStatus] = None

    @property
    def attended(self) -> bool:
        return self.status is not None


@dataclass(frozen=True)
class RosterBlock:
    label: str
    entries: list[RosterEntry]
    cls: Optional[Class] = None

    @property
    def enrolled(self) -> int:
        return len(self.entries)

    @property
    def attended(self) -> int:
        return sum(1 for e in self.entries if e.attended)


@dataclass(frozen=True)
class WorshipSnapshot:
    log: WorshipLog
    classes: list[RosterBlock]
    new_friends: RosterBlock
    teachers_present: list[Teacher] = field(default_factory=list)
    staff_present: list[Teacher] = field(default_factory=list)
    offerings: list[Offering] = field(default_factory=list)

    @property
    def offering_total(self) -> int:
        return sum(o.amount for o in self.offerings)

    def grade_totals(self, grade: Grade) -> tuple[int, int]:
        """(enrolled, attended) across a grade's classes."""
        blocks = [b for b in self.classes if b.cls and b.cls.grade == grade]
        return sum(b.enrolled for b in blocks), sum(b.attended for b in blocks)


class WorshipSnapshotService:
    def __init__(
        self,
        logs: WorshipLogRepository,
        classes: ClassRepository,
        teachers: TeacherRepository,
        attendance: AttendanceRepository,
        roster: RosterService,
        offerings: OfferingService,
    ):
        self._logs = logs
        self._classes = classes
        self._teachers = teachers
        self._attendance = attendance
        self._roster = roster
        self._offerings = offerings

    def build(self, log_date: DateLike) -> WorshipSnapshot:
        day = as_date(log_date)
        log = self._logs.get_by_date(day)
        if not log:
            raise ValidationError("No worship log saved for this date")

        marks = {m.student_id: m.status for m in self._attendance.list_for_log(log.log_id)}

        def entries(students: list[Student]) -> list[RosterEntry]:
            return [RosterEntry(student=s, status=marks.get(s.student_id)) for s in students]

        ordered = sorted(self._classes.list_all(), key=lambda c: (c.grade != Grade.MIDDLE, c.name))
        blocks = [
            RosterBlock(label=c.short_label, entries=entries(self._roster.class_roster(c.class_id, day)), cls=c)
            for c in ordered
        ]
        new_friends = RosterBlock(label="새친구", entries=entries(self._roster.new_friend_roster(day)))

        present_ids = self._attendance.staff_present(log.log_id)
        attending = [t for t in self._teachers.list_active() if t.teacher_id in present_ids]

        return WorshipSnapshot(
            log=log,
            classes=blocks,
            new_friends=new_friends,
            teachers_present=[t for t in attending if t.role == TeacherRole.TEACHER],
            staff_present=[t for t in attending if t.role == TeacherRole.STAFF],
            offerings=self._offerings.list_for_log(log.log_id),
        )
