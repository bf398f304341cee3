from __future__ import annotations

from enum import Enum


class Grade(str, Enum):
    """Department a class belongs to."""

    MIDDLE = "Middle"
    HIGH = "High"

    @property
    def short_label(self) -> str:
        return "중" if self is Grade.MIDDLE else "고"

    @property
    def label(self) -> str:
        return "중등" if self is Grade.MIDDLE else "고등"


class AttendanceStatus(str, Enum):
    """How a student attended a service."""

    PRESENT = "present"
    ONLINE = "online"


class TeacherRole(str, Enum):
    TEACHER = "Teacher"
    STAFF = "Staff"


class StudentTag(str, Enum):
    """Tags that carry meaning for roster rules and the paper form."""

    NEW_FRIEND = "new-friend"
    SPECIAL_GROUP = "special-group"


class StoreOperation(str, Enum):
    """Step that was being written when the store failed."""

    RENAME = "rename"
    INSERT = "insert"
    TRANSITION = "transition"
    UPDATE = "update"
    DELETE = "delete"


class NameOutcome(str, Enum):
    UNCHANGED = "UNCHANGED"
    AUTO_SUFFIXED = "AUTO_SUFFIXED"
    PROMOTED = "PROMOTED"
