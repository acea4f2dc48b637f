# tests/test_tasks.py

from __future__ import annotations

from datetime import datetime, timezone
import uuid

import pytest
from fastapi.testclient import TestClient

from motivodo.services.storage import get_storage

from .helpers import create_task, parse_instant


def test_task_endpoints_require_authentication(client) -> None:
    task_id = uuid.uuid4()

    assert client.get("/api/tasks").status_code == 401
    assert client.post("/api/tasks", json={"title": "x"}).status_code == 401
    assert client.patch(f"/api/tasks/{task_id}", json={"completed": True}).status_code == 401
    assert client.delete(f"/api/tasks/{task_id}").status_code == 401


def test_unauthenticated_request_fails_before_validation(client) -> None:
    response = client.post("/api/tasks", json={"title": ""})

    assert response.status_code == 401


def test_create_task_applies_defaults(client, alice) -> None:
    task = create_task(client, title="Buy milk")

    assert task["title"] == "Buy milk"
    assert task["completed"] is False
    assert task["priority"] == "medium"
    assert task["description"] is None
    assert task["dueDate"] is None
    assert task["category"] is None
    assert task["userId"] == alice["id"]
    assert uuid.UUID(task["id"])
    assert task["createdAt"]


def test_created_task_is_listed_first_with_input_fields(client, alice) -> None:
    create_task(client, title="Older task")
    created = create_task(
        client,
        title="Write report",
        description="Quarterly numbers",
        dueDate="2026-11-01T09:00:00",
        priority="high",
        category="Work",
    )

    tasks = client.get("/api/tasks").json()

    assert [t["title"] for t in tasks] == ["Write report", "Older task"]
    first = tasks[0]
    assert first == created
    assert first["description"] == "Quarterly numbers"
    assert parse_instant(first["dueDate"]) == datetime(2026, 11, 1, 9, 0, tzinfo=timezone.utc)
    assert first["priority"] == "high"
    assert first["category"] == "Work"


def test_create_accepts_snake_case_fields(client, alice) -> None:
    task = create_task(client, title="Dentist", due_date="2026-12-01T08:30:00")

    assert parse_instant(task["dueDate"]) == datetime(2026, 12, 1, 8, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "due",
    ["2026-10-20T10:00:00+05:00", "2026-10-20T05:00:00Z", "2026-10-20T01:00:00-04:00"],
)
def test_due_date_offset_is_kept_as_the_same_instant(client, alice, due) -> None:
    created = create_task(client, title="Call", dueDate=due)
    listed = client.get("/api/tasks").json()[0]
    fetched = client.get(f"/api/tasks/{created['id']}").json()

    expected = datetime(2026, 10, 20, 5, 0, tzinfo=timezone.utc)
    for task in (created, listed, fetched):
        assert parse_instant(task["dueDate"]) == expected
        assert parse_instant(task["dueDate"]).utcoffset().total_seconds() == 0


def test_patch_due_date_with_offset_is_stored_in_utc(client, alice) -> None:
    task = create_task(client, title="Move")

    updated = client.patch(
        f"/api/tasks/{task['id']}", json={"dueDate": "2026-10-21T23:30:00-02:00"}
    ).json()

    assert parse_instant(updated["dueDate"]) == datetime(2026, 10, 22, 1, 30, tzinfo=timezone.utc)
    fetched = client.get(f"/api/tasks/{task['id']}").json()
    assert fetched["dueDate"] == updated["dueDate"]


def test_created_at_carries_utc_offset(client, alice) -> None:
    before = datetime.now(timezone.utc)
    task = create_task(client, title="Stamp")

    created_at = parse_instant(task["createdAt"])

    assert created_at.tzinfo is not None
    assert created_at.utcoffset().total_seconds() == 0
    assert abs((created_at - before).total_seconds()) < 60
    assert parse_instant(alice["createdAt"]).utcoffset().total_seconds() == 0


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"title": ""},
        {"title": None},
        {"title": "ok", "priority": "urgent"},
        {"title": "ok", "dueDate": "not-a-date"},
        {"title": "ok", "completed": "maybe"},
    ],
)
def test_create_validation_failure(client, alice, payload) -> None:
    response = client.post("/api/tasks", json=payload)

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"][0] == "body"
    assert client.get("/api/tasks").json() == []


def test_list_only_returns_own_tasks(client, other_client, alice, bob) -> None:
    create_task(client, title="Alice task")
    create_task(other_client, title="Bob task")

    assert [t["title"] for t in client.get("/api/tasks").json()] == ["Alice task"]
    assert [t["title"] for t in other_client.get("/api/tasks").json()] == ["Bob task"]


def test_patch_completed_keeps_other_fields(client, alice) -> None:
    task = create_task(client, title="Buy milk", description="2 litres", category="Errands")

    response = client.patch(f"/api/tasks/{task['id']}", json={"completed": True})

    assert response.status_code == 200
    updated = response.json()
    assert updated["completed"] is True
    assert updated["title"] == "Buy milk"
    assert updated["description"] == "2 litres"
    assert updated["category"] == "Errands"
    assert updated["priority"] == "medium"
    assert updated["createdAt"] == task["createdAt"]


def test_patch_never_changes_owner_or_id(client, alice, bob) -> None:
    task = create_task(client, title="Mine")

    response = client.patch(
        f"/api/tasks/{task['id']}",
        json={"title": "Still mine", "userId": bob["id"], "id": str(uuid.uuid4())},
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["id"] == task["id"]
    assert updated["userId"] == alice["id"]
    assert updated["title"] == "Still mine"


def test_patch_can_clear_optional_fields(client, alice) -> None:
    task = create_task(client, title="Call mom", description="Sunday", category="Family")

    updated = client.patch(
        f"/api/tasks/{task['id']}", json={"description": None, "category": None}
    ).json()

    assert updated["description"] is None
    assert updated["category"] is None
    assert updated["title"] == "Call mom"


def test_patch_changes_priority_together_with_completion(client, alice) -> None:
    task = create_task(client, title="Gym", priority="low")

    updated = client.patch(
        f"/api/tasks/{task['id']}", json={"completed": True, "priority": "high"}
    ).json()

    assert updated["completed"] is True
    assert updated["priority"] == "high"


@pytest.mark.parametrize(
    "payload",
    [
        {"title": ""},
        {"title": None},
        {"completed": None},
        {"priority": None},
        {"priority": "urgent"},
    ],
)
def test_patch_validation_failure(client, alice, payload) -> None:
    task = create_task(client, title="Keep me")

    response = client.patch(f"/api/tasks/{task['id']}", json=payload)

    assert response.status_code == 422
    assert client.get("/api/tasks").json()[0]["title"] == "Keep me"


def test_patch_unknown_task_is_not_found(client, alice) -> None:
    response = client.patch(f"/api/tasks/{uuid.uuid4()}", json={"completed": True})

    assert response.status_code == 404
    assert response.json()["detail"] == "Task not found"


def test_malformed_task_id_is_rejected(client, alice) -> None:
    assert client.patch("/api/tasks/not-a-uuid", json={"completed": True}).status_code == 422
    assert client.delete("/api/tasks/not-a-uuid").status_code == 422


def test_other_users_task_is_forbidden(client, other_client, alice, bob) -> None:
    task = create_task(client, title="Secret plans", description="do not share")
    url = f"/api/tasks/{task['id']}"

    responses = [
        other_client.get(url),
        other_client.patch(url, json={"completed": True}),
        other_client.delete(url),
    ]

    for response in responses:
        assert response.status_code == 403
        assert "Secret plans" not in response.text
        assert "do not share" not in response.text

    still_there = client.get("/api/tasks").json()
    assert still_there == [task]


def test_get_single_task(client, alice) -> None:
    task = create_task(client, title="Read book")

    response = client.get(f"/api/tasks/{task['id']}")

    assert response.status_code == 200
    assert response.json() == task


def test_delete_task(client, alice) -> None:
    task = create_task(client, title="Throw away")

    response = client.delete(f"/api/tasks/{task['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted successfully"}
    assert client.get("/api/tasks").json() == []


def test_delete_twice_is_not_found(client, alice) -> None:
    task = create_task(client, title="Once")
    assert client.delete(f"/api/tasks/{task['id']}").status_code == 200

    response = client.delete(f"/api/tasks/{task['id']}")

    assert response.status_code == 404


def test_delete_unknown_task_is_not_found(client, alice) -> None:
    assert client.delete(f"/api/tasks/{uuid.uuid4()}").status_code == 404


class _BrokenStorage:
    def get_tasks_by_user_id(self, user_id):
        raise RuntimeError("database exploded: password=hunter2")


def test_unexpected_errors_return_generic_500(api, alice_cookie) -> None:
    api.dependency_overrides[get_storage] = lambda: _BrokenStorage()
    with TestClient(api, raise_server_exceptions=False) as c:
        c.cookies.set(*alice_cookie)
        response = c.get("/api/tasks")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert "hunter2" not in response.text


@pytest.fixture()
def alice_cookie(client, alice):
    from motivodo.core.config import settings

    return settings.TOKEN_COOKIE, client.cookies.get(settings.TOKEN_COOKIE)
