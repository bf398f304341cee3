"""Which students appear on a roster as of a given service date.

Visibility is derived from dated fields, never stored:

- a class roster shows a student from ``class_assigned_date`` on (always, when
  the date is missing on legacy records);
- the new-friend roster shows a student who is tagged or has a
  ``first_visit_date`` from that date up to the day before
  ``class_assigned_date``.

For records written through :mod:`roster.service` the two windows never
overlap for the same student and date.
"""
from __future__ import annotations

import warnings
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import DateLike, as_date, as_optional_date
from ..core.exceptions import InconsistentStateWarning
from ..students.model import Student


@dataclass(frozen=True)
class RosterContext:
    """A real class roster (``class_id``) or the new-friend pseudo-class."""

    class_id: Optional[int] = None
    new_friend: bool = False

    def __post_init__(self):
        if (self.class_id is None) == (not self.new_friend):
            raise ValueError("RosterContext needs exactly one of class_id or new_friend")

    @classmethod
    def for_class(cls, class_id: int) -> "RosterContext":
        return cls(class_id=int(class_id))

    @classmethod
    def new_friends(cls) -> "RosterContext":
        return cls(new_friend=True)


def detect_inconsistencies(student: Student) -> list[str]:
    problems: list[str] = []
    assigned = as_optional_date(student.class_assigned_date)
    first_visit = as_optional_date(student.first_visit_date)

    if assigned is not None and student.class_id is None:
        problems.append("class_assigned_date is set but the student has no class")
    if assigned is not None and student.is_new_friend:
        problems.append("new-friend tag is still present after class assignment")
    if assigned is not None and first_visit is not None and assigned < first_visit:
        problems.append("class_assigned_date is earlier than first_visit_date")
    return problems


def _in_context(student: Student, context: RosterContext) -> bool:
    if context.new_friend:
        # Assignment retires the tag; the first visit keeps the new-friend weeks on record.
        return student.is_new_friend or student.first_visit_date is not None
    return student.class_id == context.class_id


def _within_window(student: Student, context: RosterContext, ref: date) -> bool:
    assigned = as_optional_date(student.class_assigned_date)
    if context.new_friend:
        first_visit = as_optional_date(student.first_visit_date)
        if first_visit is not None and ref < first_visit:
            return False
        return assigned is None or ref < assigned
    return assigned is None or assigned <= ref


def is_visible(student: Student, context: RosterContext, reference_date: DateLike) -> bool:
    if not student.is_active or not _in_context(student, context):
        return False
    return _within_window(student, context, as_date(reference_date))


def visible_students(
    students: Iterable[Student],
    context: RosterContext,
    reference_date: DateLike,
) -> list[Student]:
    """Filter ``students`` to those on ``context``'s roster at ``reference_date``.

    Pure: no store access, input order is kept. Contradictory legacy records
    raise an :class:`InconsistentStateWarning` and are still judged by the
    same date rules.
    """
    ref = as_date(reference_date)
    out: list[Student] = []
    for student in students:
        if not student.is_active or not _in_context(student, context):
            continue
        problems = detect_inconsistencies(student)
        if problems:
            warnings.warn(
                f"student {student.student_id} ({student.name}): {'; '.join(problems)}",
                InconsistentStateWarning,
                stacklevel=2,
            )
        if _within_window(student, context, ref):
            out.append(student)
    return out
