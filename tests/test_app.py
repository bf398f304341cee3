from datetime import date

import pytest

from src.worship_log.worship_log.container import wire_services
from src.worship_log.worship_log.main import create_app
from src.worship_log.worship_log.students.model import Student
from tests.conftest import InMemoryLogs, InMemoryOfferings, InMemoryStudents


@pytest.fixture
def students_repo(classes_repo):
    return InMemoryStudents(
        [Student(student_id=1, name="Kim", class_id=1, class_assigned_date=date(2024, 1, 7))],
        classes=classes_repo.by_id,
    )


@pytest.fixture
def client(monkeypatch, students_repo, classes_repo, teachers_repo, attendance_repo):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire_services(
        students_repo=students_repo,
        classes_repo=classes_repo,
        teachers_repo=teachers_repo,
        logs_repo=InMemoryLogs(),
        attendance_repo=attendance_repo,
        offerings_repo=InMemoryOfferings(),
    )
    app = create_app(container=container)
    return app.test_client()


def test_duplicate_needs_confirmation_then_succeeds(client, students_repo):
    resp = client.post("/api/students", json={"name": "Kim"})

    assert resp.status_code == 409
    body = resp.get_json()
    assert body["needs_confirmation"] is True
    assert "중등-1반" in body["message"]
    assert students_repo.names() == ["Kim"]

    resp = client.post("/api/students", json={"name": "Kim", "confirm_duplicate": True})

    assert resp.status_code == 201
    body = resp.get_json()
    assert body["name"] == "KimB"
    assert body["renamed"] == {"student_id": 1, "old_name": "Kim", "new_name": "KimA"}
    assert students_repo.names() == ["KimA", "KimB"]


def test_validation_error_is_400(client):
    resp = client.post("/api/students", json={"name": " "})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_store_failure_is_502_with_step(client, students_repo):
    students_repo.fail_on.add("create")

    resp = client.post("/api/students", json={"name": "Kim", "confirm_duplicate": True})

    assert resp.status_code == 502
    body = resp.get_json()
    assert body["operation"] == "insert"
    assert body["rolled_back"] is True


def test_class_roster_by_date(client):
    before = client.get("/api/classes/1/roster?date=2024-01-06").get_json()
    after = client.get("/api/classes/1/roster?date=2024-01-07").get_json()

    assert before["students"] == []
    assert [s["name"] for s in after["students"]] == ["Kim"]


def test_new_friend_flow(client):
    created = client.post(
        "/api/students", json={"name": "Yoon", "tags": ["new-friend"], "date": "2024-01-05"}
    ).get_json()
    sid = created["student_id"]

    roster = client.get("/api/roster/new-friends?date=2024-01-05").get_json()
    assert [s["name"] for s in roster["students"]] == ["Yoon"]

    resp = client.post(f"/api/students/{sid}/assign", json={"class_id": 1, "date": "2024-02-01"})
    assert resp.status_code == 200
    assert resp.get_json()["changes"]["class_assigned_date"] == "2024-02-01"

    january = client.get("/api/classes/1/roster?date=2024-01-31").get_json()
    february = client.get("/api/classes/1/roster?date=2024-02-01").get_json()
    assert [s["name"] for s in january["students"]] == ["Kim"]
    assert [s["name"] for s in february["students"]] == ["Kim", "Yoon"]

    before = client.get("/api/roster/new-friends?date=2024-01-31").get_json()
    after = client.get("/api/roster/new-friends?date=2024-02-01").get_json()
    assert [s["name"] for s in before["students"]] == ["Yoon"]
    assert after["students"] == []


def test_non_text_name_is_400(client, students_repo):
    resp = client.post("/api/students", json={"name": 123})

    assert resp.status_code == 400
    assert students_repo.names() == ["Kim"]
