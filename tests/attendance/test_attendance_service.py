from datetime import date

import pytest

from src.worship_log.worship_log.attendance.service import AttendanceService
from src.worship_log.worship_log.core.enums import AttendanceStatus
from src.worship_log.worship_log.core.exceptions import ValidationError
from src.worship_log.worship_log.worship_logs.model import WorshipLog
from tests.conftest import InMemoryLogs


@pytest.fixture
def svc(attendance_repo):
    logs = InMemoryLogs([WorshipLog(log_id=1, log_date=date(2024, 3, 10))])
    return AttendanceService(attendance_repo, logs)


def test_toggle_flips_presence(svc):
    assert svc.toggle(1, 5) is True
    assert svc.marks_for_log(1) == {5: AttendanceStatus.PRESENT}

    assert svc.toggle(1, 5) is False
    assert svc.marks_for_log(1) == {}


def test_toggle_without_saved_log(svc):
    with pytest.raises(ValidationError, match="worship info"):
        svc.toggle(None, 5)


def test_unknown_log(svc):
    with pytest.raises(ValidationError):
        svc.toggle(42, 5)


def test_set_status_keeps_one_mark_per_student(svc, attendance_repo):
    svc.set_status(1, 5, "present")
    svc.set_status(1, 5, AttendanceStatus.ONLINE)

    assert svc.marks_for_log(1) == {5: AttendanceStatus.ONLINE}
    assert attendance_repo.count_for_student(5) == 1

    svc.set_status(1, 5, None)
    assert svc.marks_for_log(1) == {}


def test_toggle_staff(svc):
    assert svc.toggle_staff(1, 2) is True
    assert svc.staff_present(1) == {2}
    assert svc.toggle_staff(1, 2) is False
    assert svc.staff_present(1) == set()
