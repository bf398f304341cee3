"""Youth-group worship log.

Feature modules (students, roster, classes, attendance, ...) each keep a
domain model, a repository Protocol with a MySQL adapter, a service layer and
a thin Flask controller.
"""
from __future__ import annotations

from .container import Container, build_container, wire_services
from .roster.visibility import RosterContext, visible_students
from .students.naming import plan_new_student_name

__all__ = [
    "Container",
    "RosterContext",
    "build_container",
    "plan_new_student_name",
    "visible_students",
    "wire_services",
]
