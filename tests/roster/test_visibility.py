from datetime import date

import pytest

from src.worship_log.worship_log.core.exceptions import InconsistentStateWarning
from src.worship_log.worship_log.roster.visibility import (
    RosterContext,
    detect_inconsistencies,
    is_visible,
    visible_students,
)
from src.worship_log.worship_log.students.model import Student

CLASS_X = RosterContext.for_class(10)
NEW_FRIENDS = RosterContext.new_friends()


def test_class_roster_starts_on_assignment_date():
    s = Student(student_id=1, name="Kim", class_id=10, class_assigned_date=date(2024, 3, 10))

    assert visible_students([s], CLASS_X, "2024-03-03") == []
    assert visible_students([s], CLASS_X, "2024-03-10") == [s]
    assert visible_students([s], CLASS_X, date(2024, 3, 17)) == [s]


def test_new_friend_then_class_windows_do_not_overlap():
    s = Student(
        student_id=1,
        name="Yoon",
        class_id=10,
        first_visit_date=date(2024, 1, 5),
        class_assigned_date=date(2024, 2, 1),
        tags=("new-friend",),
    )

    with pytest.warns(InconsistentStateWarning):
        assert not is_visible(s, NEW_FRIENDS, "2024-01-04")
        assert is_visible(s, NEW_FRIENDS, "2024-01-05")
        assert is_visible(s, NEW_FRIENDS, "2024-01-31")
        assert not is_visible(s, NEW_FRIENDS, "2024-02-01")
        assert visible_students([s], NEW_FRIENDS, "2024-01-31") == [s]
        assert visible_students([s], NEW_FRIENDS, "2024-02-01") == []
        assert visible_students([s], CLASS_X, "2024-01-31") == []
        assert visible_students([s], CLASS_X, "2024-02-01") == [s]


def test_new_friend_window_with_tag_retired():
    # the state assign_to_class leaves behind
    s = Student(
        student_id=1,
        name="Yoon",
        class_id=10,
        first_visit_date=date(2024, 1, 5),
        class_assigned_date=date(2024, 2, 1),
    )

    assert visible_students([s], NEW_FRIENDS, "2024-01-04") == []
    assert visible_students([s], NEW_FRIENDS, "2024-01-20") == [s]
    assert visible_students([s], NEW_FRIENDS, "2024-01-31") == [s]
    assert visible_students([s], NEW_FRIENDS, "2024-02-01") == []
    assert visible_students([s], CLASS_X, "2024-01-31") == []
    assert visible_students([s], CLASS_X, "2024-02-01") == [s]


def test_current_new_friend_visible_from_first_visit():
    s = Student(student_id=1, name="Yoon", first_visit_date=date(2024, 1, 5), tags=("new-friend",))

    assert visible_students([s], NEW_FRIENDS, "2024-01-04") == []
    assert visible_students([s], NEW_FRIENDS, "2030-01-01") == [s]


def test_legacy_student_without_dates_always_in_class():
    s = Student(student_id=1, name="Park", class_id=10)

    assert visible_students([s], CLASS_X, "1990-01-01") == [s]
    assert visible_students([s], CLASS_X, "2099-12-31") == [s]


def test_legacy_new_friend_without_dates_always_on_new_friend_roster():
    s = Student(student_id=1, name="Park", tags=("new-friend",))

    assert visible_students([s], NEW_FRIENDS, "1990-01-01") == [s]


def test_other_class_and_inactive_excluded():
    students = [
        Student(student_id=1, name="A", class_id=10),
        Student(student_id=2, name="B", class_id=11),
        Student(student_id=3, name="C", class_id=10, is_active=False),
        Student(student_id=4, name="D", class_id=10),
    ]

    visible = visible_students(students, CLASS_X, "2024-01-01")

    assert [s.name for s in visible] == ["A", "D"]


def test_inconsistent_record_warns_but_still_filters():
    s = Student(student_id=1, name="Ghost", class_assigned_date=date(2024, 1, 1), tags=("new-friend",))

    with pytest.warns(InconsistentStateWarning):
        visible = visible_students([s], NEW_FRIENDS, "2024-02-01")

    assert visible == []
    assert len(detect_inconsistencies(s)) == 2


def test_consistent_record_has_no_problems():
    s = Student(student_id=1, name="Kim", class_id=10, class_assigned_date=date(2024, 3, 10))

    assert detect_inconsistencies(s) == []


def test_context_needs_exactly_one_target():
    with pytest.raises(ValueError):
        RosterContext()
    with pytest.raises(ValueError):
        RosterContext(class_id=1, new_friend=True)


def test_every_date_lands_on_exactly_one_roster_after_assignment():
    s = Student(
        student_id=1,
        name="Yoon",
        class_id=10,
        first_visit_date=date(2024, 1, 5),
        class_assigned_date=date(2024, 2, 1),
    )

    for day in ("2024-01-05", "2024-01-18", "2024-01-31", "2024-02-01", "2024-03-03"):
        on_new = visible_students([s], NEW_FRIENDS, day)
        on_class = visible_students([s], CLASS_X, day)
        assert len(on_new) + len(on_class) == 1, day
