from datetime import date

import pytest

from src.worship_log.worship_log.core.enums import AttendanceStatus, Grade
from src.worship_log.worship_log.core.exceptions import ValidationError
from src.worship_log.worship_log.offerings.service import OfferingService
from src.worship_log.worship_log.reports.service import WorshipSnapshotService
from src.worship_log.worship_log.roster.service import RosterService
from src.worship_log.worship_log.students.model import Student
from src.worship_log.worship_log.worship_logs.model import WorshipLog
from tests.conftest import InMemoryLogs, InMemoryOfferings, InMemoryStudents


@pytest.fixture
def offerings():
    return OfferingService(InMemoryOfferings())


@pytest.fixture
def svc(classes_repo, teachers_repo, attendance_repo, offerings):
    students = InMemoryStudents(
        [
            Student(student_id=1, name="Kim", class_id=1),
            Student(
                student_id=2,
                name="Yoon",
                class_id=1,
                first_visit_date=date(2024, 1, 5),
                class_assigned_date=date(2024, 2, 1),
            ),
            Student(student_id=3, name="Han", tags=("new-friend",), first_visit_date=date(2024, 1, 20)),
            Student(student_id=4, name="Park", class_id=2),
        ]
    )
    logs = InMemoryLogs(
        [
            WorshipLog(log_id=1, log_date=date(2024, 1, 21)),
            WorshipLog(log_id=2, log_date=date(2024, 2, 4)),
        ]
    )
    attendance_repo.upsert_status(log_id=1, student_id=2, status=AttendanceStatus.PRESENT)
    attendance_repo.upsert_status(log_id=1, student_id=4, status=AttendanceStatus.ONLINE)
    attendance_repo.set_staff_present(log_id=1, teacher_id=1, present=True)
    attendance_repo.set_staff_present(log_id=1, teacher_id=2, present=True)
    offerings.update(1, "주일헌금", amount=10000)

    roster = RosterService(students, attendance_repo)
    return WorshipSnapshotService(logs, classes_repo, teachers_repo, attendance_repo, roster, offerings)


def test_snapshot_resolves_rosters_for_the_log_date(svc):
    snap = svc.build("2024-01-21")

    middle, high = snap.classes
    assert middle.label == "중 1반"
    assert [e.student.name for e in middle.entries] == ["Kim"]
    assert [e.student.name for e in snap.new_friends.entries] == ["Han", "Yoon"]
    assert [(e.student.name, e.status) for e in high.entries] == [("Park", AttendanceStatus.ONLINE)]
    assert snap.grade_totals(Grade.HIGH) == (1, 1)


def test_new_friend_moves_to_class_on_later_date(svc):
    snap = svc.build(date(2024, 2, 4))

    middle = snap.classes[0]
    assert [e.student.name for e in middle.entries] == ["Kim", "Yoon"]
    assert middle.attended == 0
    assert [e.student.name for e in snap.new_friends.entries] == ["Han"]


def test_assigned_student_keeps_new_friend_attendance_before_assignment(svc):
    snap = svc.build("2024-01-21")

    yoon = next(e for e in snap.new_friends.entries if e.student.name == "Yoon")
    assert yoon.status == AttendanceStatus.PRESENT
    assert snap.new_friends.attended == 1
    assert all(e.student.name != "Yoon" for block in snap.classes for e in block.entries)


def test_staff_and_offerings(svc):
    snap = svc.build("2024-01-21")

    assert [t.name for t in snap.teachers_present] == ["Lee"]
    assert [t.name for t in snap.staff_present] == ["Choi"]
    assert snap.offering_total == 10000
    assert len(snap.offerings) == 4


def test_unsaved_date(svc):
    with pytest.raises(ValidationError):
        svc.build("2024-05-05")
