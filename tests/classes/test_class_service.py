import pytest

from src.worship_log.worship_log.classes.service import ClassService, parse_grade
from src.worship_log.worship_log.core.enums import Grade
from src.worship_log.worship_log.core.exceptions import ValidationError


@pytest.fixture
def svc(classes_repo):
    return ClassService(classes_repo)


def test_parse_grade():
    assert parse_grade("Middle") is Grade.MIDDLE
    assert parse_grade(Grade.HIGH) is Grade.HIGH
    with pytest.raises(ValidationError):
        parse_grade("Elementary")


def test_create_class(svc, classes_repo):
    class_id = svc.create_class(grade="High", name=" 3반 ", teacher_id=1)

    created = classes_repo.get_by_id(class_id)
    assert created.grade is Grade.HIGH
    assert created.name == "3반"
    assert created.teacher_id == 1
    assert created.short_label == "고 3반"


def test_teacher_id_zero_means_no_teacher(svc, classes_repo):
    class_id = svc.create_class(grade="Middle", name="3반", teacher_id=0)

    assert classes_repo.get_by_id(class_id).teacher_id is None


def test_create_class_rejects_bad_input(svc, classes_repo):
    with pytest.raises(ValidationError):
        svc.create_class(grade="Elementary", name="1반")
    with pytest.raises(ValidationError):
        svc.create_class(grade="Middle", name="  ")
    assert len(classes_repo.list_all()) == 2


def test_list_classes_by_grade(svc):
    assert [c.name for c in svc.list_classes(Grade.MIDDLE)] == ["1반"]
    assert len(svc.list_classes()) == 2


def test_delete_class(svc, classes_repo):
    svc.delete_class(1)

    assert classes_repo.get_by_id(1) is None
    with pytest.raises(ValidationError):
        svc.delete_class(1)
