from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import DateLike, as_date, as_optional_date, format_iso, today_local
from ..common.validators import require_positive_id
from ..core.enums import StoreOperation, StudentTag
from ..core.exceptions import StoreWriteFailure, ValidationError
from ..students.model import Student, with_tag, without_tag
from ..students.repository import StudentRepository
from .visibility import RosterContext, visible_students

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionResult:
    """Fields written by a transition, for the caller to patch local state."""

    student_id: int
    changes: dict[str, Any] = field(default_factory=dict)
    warnings: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.changes)


class RosterService:
    """Moves students between unassigned, new-friend and class-assigned.

    Every transition is exactly one ``update_fields`` call so a student is
    never left half-moved by a failed second write.
    """

    def __init__(
        self,
        students: StudentRepository,
        attendance: Optional[AttendanceRepository] = None,
        *,
        clock: Callable = today_local,
    ):
        self._students = students
        self._attendance = attendance
        self._clock = clock

    def class_roster(self, class_id: int, reference_date: DateLike) -> list[Student]:
        class_id = require_positive_id(class_id, "Class")
        candidates = self._students.list_active(class_id=class_id)
        return visible_students(candidates, RosterContext.for_class(class_id), reference_date)

    def new_friend_roster(self, reference_date: DateLike) -> list[Student]:
        candidates = self._students.list_active(tag=StudentTag.NEW_FRIEND.value, with_first_visit=True)
        return visible_students(candidates, RosterContext.new_friends(), reference_date)

    def tag_new_friend(self, student_id: int, reference_date: DateLike) -> TransitionResult:
        student = self._require(student_id)
        ref = as_date(reference_date)

        result_warnings: list[str] = []
        if self._attendance and self._attendance.count_for_student(student.student_id) > 0:
            result_warnings.append(
                f'"{student.name}" already has attendance records. Marking them as a new friend from '
                f"{format_iso(ref)} hides those records from class rosters for earlier dates."
            )

        changes = {
            "tags": with_tag(student.tags, StudentTag.NEW_FRIEND),
            "first_visit_date": ref,
            "class_assigned_date": None,
            "class_id": None,
        }
        self._write(student, changes)
        logger.info("student %s tagged new-friend from %s", student.student_id, ref)
        return TransitionResult(student_id=student.student_id, changes=changes, warnings=tuple(result_warnings))

    def assign_to_class(
        self,
        student_id: int,
        class_id: int,
        reference_date: Optional[DateLike] = None,
    ) -> TransitionResult:
        """Put a student into a class.

        Coming from new-friend status (tag or a recorded first visit) retires
        the tag and stamps ``class_assigned_date``; without a reference date
        today's local date is used. Plain moves leave the date untouched.
        """
        class_id = require_positive_id(class_id, "Class")
        student = self._require(student_id)

        changes: dict[str, Any] = {"class_id": class_id}
        if student.is_new_friend or student.first_visit_date is not None:
            ref = as_date(reference_date) if reference_date else self._clock()
            first_visit = as_optional_date(student.first_visit_date)
            if first_visit is not None and ref < first_visit:
                raise ValidationError(
                    f"Class assignment date {format_iso(ref)} is before the first visit {format_iso(first_visit)}"
                )
            changes["tags"] = without_tag(student.tags, StudentTag.NEW_FRIEND)
            changes["class_assigned_date"] = ref

        self._write(student, changes)
        logger.info("student %s assigned to class %s", student.student_id, class_id)
        return TransitionResult(student_id=student.student_id, changes=changes)

    def remove_from_class(self, student_id: int) -> TransitionResult:
        student = self._require(student_id)
        changes = {"class_id": None}
        self._write(student, changes)
        logger.info("student %s moved to unassigned", student.student_id)
        return TransitionResult(student_id=student.student_id, changes=changes)

    def remove_tag(self, student_id: int, tag: StudentTag | str) -> TransitionResult:
        student = self._require(student_id)
        if not student.has_tag(tag):
            return TransitionResult(student_id=student.student_id)

        changes = {"tags": without_tag(student.tags, tag)}
        self._write(student, changes)
        return TransitionResult(student_id=student.student_id, changes=changes)

    def _require(self, student_id: int) -> Student:
        student = self._students.get_by_id(require_positive_id(student_id, "Student"))
        if not student:
            raise ValidationError("Student does not exist")
        return student

    def _write(self, student: Student, changes: dict[str, Any]) -> None:
        try:
            ok = self._students.update_fields(student.student_id, changes=changes)
        except Exception as exc:
            logger.error("roster update for student %s failed: %s", student.student_id, exc)
            raise StoreWriteFailure(
                StoreOperation.TRANSITION,
                f'Updating "{student.name}" failed: {exc}',
                student_id=student.student_id,
            ) from exc
        if not ok:
            raise StoreWriteFailure(
                StoreOperation.TRANSITION,
                f'Updating "{student.name}" failed: record no longer exists',
                student_id=student.student_id,
            )
