from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import DateLike, as_date, today_local
from ..common.validators import require_non_empty, require_positive_id
from ..core.enums import NameOutcome, StoreOperation, StudentTag
from ..core.exceptions import AmbiguousNameDeclined, StoreWriteFailure, ValidationError
from .model import Student
from .naming import NamePlan, RenamePlan, plan_new_student_name
from .repository import StudentRepository

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool]
NotifyCallback = Callable[[str], None]


@dataclass(frozen=True)
class AddStudentResult:
    student_id: int
    name: str
    plan: NamePlan
    notices: tuple[str, ...] = ()

    @property
    def renamed(self) -> Optional[RenamePlan]:
        return self.plan.rename


def duplicate_prompt(plan: NamePlan) -> str:
    conflict = plan.conflict
    label = conflict.placement_label if conflict else ""
    return (
        f'A student "{label} {plan.base_name}" already exists. Is this a different person with the same name?\n'
        "(Cancel to skip adding)"
    )


def _notices_for(plan: NamePlan) -> tuple[str, ...]:
    if plan.outcome == NameOutcome.PROMOTED and plan.rename:
        return (
            f'Existing "{plan.rename.old_label}" was renamed to "{plan.rename.new_name}", '
            f'and the new student was saved as "{plan.final_name}".',
        )
    if plan.outcome == NameOutcome.AUTO_SUFFIXED:
        return (
            f'"{plan.base_name}" already exists as same-named students, '
            f'so the new student was saved as "{plan.final_name}".',
        )
    return ()


class StudentService:
    """Use case: create and maintain student records."""

    def __init__(self, students: StudentRepository, *, clock: Callable = today_local):
        self._students = students
        self._clock = clock

    def list_active(self) -> Sequence[Student]:
        return self._students.list_active()

    def get(self, student_id: int) -> Student:
        student = self._students.get_by_id(require_positive_id(student_id, "Student"))
        if not student:
            raise ValidationError("Student does not exist")
        return student

    def add_student(
        self,
        name: str,
        *,
        class_id: Optional[int] = None,
        tags: Iterable[str] = (),
        reference_date: Optional[DateLike] = None,
        confirm: Optional[ConfirmCallback] = None,
        notify: Optional[NotifyCallback] = None,
    ) -> AddStudentResult:
        """Add a student, resolving same-name collisions first.

        When an exactly-named student exists, ``confirm`` is asked whether the
        new one is a different person; a missing callback or a negative answer
        aborts with :class:`AmbiguousNameDeclined` before anything is written.
        A required rename of the existing record is committed before the
        insert. If the insert then fails the rename is reverted.
        """
        base_name = require_non_empty(name, "Student name")
        if class_id is not None:
            class_id = require_positive_id(class_id, "Class")

        candidates = self._students.list_by_name_prefix(base_name, active_only=True)
        plan = plan_new_student_name(base_name, candidates)

        if plan.requires_confirmation:
            prompt = duplicate_prompt(plan)
            if confirm is None or not confirm(prompt):
                logger.info("adding %r declined: same-name student %s", base_name, plan.conflict.student_id)
                raise AmbiguousNameDeclined(base_name, prompt)

        tag_values = tuple(dict.fromkeys(t.value if isinstance(t, StudentTag) else str(t) for t in tags))
        first_visit_date = None
        if StudentTag.NEW_FRIEND.value in tag_values:
            first_visit_date = as_date(reference_date) if reference_date else self._clock()

        if plan.rename:
            self._apply_rename(plan.rename)

        try:
            student_id = self._students.create_student(
                name=plan.final_name,
                class_id=class_id,
                tags=tag_values,
                first_visit_date=first_visit_date,
            )
        except Exception as exc:
            rolled_back = self._revert_rename(plan.rename) if plan.rename else None
            logger.error("insert of student %r failed (rename rolled back: %s)", plan.final_name, rolled_back)
            raise StoreWriteFailure(
                StoreOperation.INSERT,
                f'Failed to add student "{plan.final_name}": {exc}',
                rolled_back=rolled_back,
            ) from exc

        notices = _notices_for(plan)
        if notify:
            for message in notices:
                notify(message)

        logger.info("student %s added as %r (%s)", student_id, plan.final_name, plan.outcome.value)
        return AddStudentResult(student_id=student_id, name=plan.final_name, plan=plan, notices=notices)

    def _apply_rename(self, rename: RenamePlan) -> None:
        try:
            ok = self._students.rename(rename.student_id, new_name=rename.new_name)
        except Exception as exc:
            raise StoreWriteFailure(
                StoreOperation.RENAME,
                f'Failed to rename "{rename.old_name}" to "{rename.new_name}": {exc}',
                student_id=rename.student_id,
            ) from exc
        if not ok:
            raise StoreWriteFailure(
                StoreOperation.RENAME,
                f'Failed to rename "{rename.old_name}": record no longer exists',
                student_id=rename.student_id,
            )
        logger.info("student %s renamed %r -> %r", rename.student_id, rename.old_name, rename.new_name)

    def _revert_rename(self, rename: RenamePlan) -> bool:
        try:
            return bool(self._students.rename(rename.student_id, new_name=rename.old_name))
        except Exception:
            logger.exception(
                "could not restore student %s to %r; it stays %r",
                rename.student_id,
                rename.old_name,
                rename.new_name,
            )
            return False

    def rename_student(self, student_id: int, new_name: str) -> None:
        """Direct edit. Same-name checks only run when a student is added."""
        new_name = require_non_empty(new_name, "Student name")
        student = self.get(student_id)
        try:
            ok = self._students.rename(student.student_id, new_name=new_name)
        except Exception as exc:
            raise StoreWriteFailure(StoreOperation.RENAME, f"Rename failed: {exc}", student_id=student.student_id) from exc
        if not ok:
            raise ValidationError("Rename failed")

    def soft_delete(self, student_id: int) -> None:
        student = self.get(student_id)
        if not self._students.set_active(student.student_id, is_active=False):
            raise ValidationError("Deactivating the student failed")
        logger.info("student %s deactivated", student.student_id)

    def delete_student(self, student_id: int) -> None:
        """Hard delete; the student's attendance history is removed as well."""
        student = self.get(student_id)
        try:
            ok = self._students.delete_by_id(student.student_id)
        except Exception as exc:
            raise StoreWriteFailure(StoreOperation.DELETE, f"Delete failed: {exc}", student_id=student.student_id) from exc
        if not ok:
            raise ValidationError("Deleting the student failed")
        logger.warning("student %s (%r) deleted with its attendance", student.student_id, student.name)
