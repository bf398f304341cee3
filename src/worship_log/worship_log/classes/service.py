from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty, require_positive_id
from ..core.enums import Grade
from ..core.exceptions import ValidationError
from .model import Class
from .repository import ClassRepository

logger = logging.getLogger(__name__)


def parse_grade(value) -> Grade:
    try:
        return Grade(value)
    except ValueError:
        raise ValidationError(f"Unknown grade: {value!r}") from None


class ClassService:
    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def list_classes(self, grade: Optional[Grade] = None) -> Sequence[Class]:
        return self._classes.list_all(grade=grade)

    def get(self, class_id: int) -> Class:
        cls = self._classes.get_by_id(require_positive_id(class_id, "Class"))
        if not cls:
            raise ValidationError("Class does not exist")
        return cls

    def create_class(self, *, grade, name: str, teacher_id: Optional[int] = None) -> int:
        grade = parse_grade(grade)
        name = require_non_empty(name, "Class name")
        if teacher_id:
            teacher_id = require_positive_id(teacher_id, "Teacher")
        else:
            teacher_id = None
        class_id = self._classes.create_class(grade=grade, name=name, teacher_id=teacher_id)
        logger.info("class %s created (%s %s)", class_id, grade.value, name)
        return class_id

    def delete_class(self, class_id: int) -> None:
        cls = self.get(class_id)
        if not self._classes.delete(cls.class_id):
            raise ValidationError("Deleting the class failed")
        logger.info("class %s deleted; its students are now unassigned", cls.class_id)
