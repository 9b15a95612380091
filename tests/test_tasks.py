# tests/test_tasks.py

from __future__ import annotations

from datetime import datetime

import pytest


def test_example_scenario(client, register, make_project) -> None:
    body = register("a@x.com", "secret1", "Alice")
    headers = {"Authorization": f"Bearer {body['token']}"}

    project = make_project(headers, name="Home")
    assert project["color"] == "#3B82F6"

    resp = client.post(
        "/api/tasks", json={"title": "Buy milk", "project_id": project["id"]}, headers=headers
    )
    assert resp.status_code == 201
    task = resp.json()
    assert task["status"] == "not-started"
    assert task["priority"] == "medium"
    assert task["description"] == ""
    assert task["due_date"] is None

    assert client.delete(f"/api/projects/{project['id']}", headers=headers).status_code == 200
    assert client.get("/api/tasks", headers=headers).json() == []


@pytest.mark.parametrize(
    "body",
    [
        {"project_id": "PLACEHOLDER"},
        {"title": "", "project_id": "PLACEHOLDER"},
        {"title": "No project"},
    ],
)
def test_create_task_requires_title_and_project(client, auth_headers, make_project, body) -> None:
    headers = auth_headers()
    project = make_project(headers)
    body = {k: (project["id"] if v == "PLACEHOLDER" else v) for k, v in body.items()}

    resp = client.post("/api/tasks", json=body, headers=headers)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Title and project_id are required"}
    assert client.get("/api/tasks", headers=headers).json() == []


def test_create_task_in_foreign_project_is_rejected(client, auth_headers, make_project) -> None:
    alice = auth_headers("a@x.com", "Alice")
    bob = auth_headers("b@x.com", "Bob")
    project = make_project(alice)

    resp = client.post(
        "/api/tasks", json={"title": "sneaky", "project_id": project["id"]}, headers=bob
    )

    assert resp.status_code == 404
    assert client.get("/api/tasks", headers=alice).json() == []
    assert client.get("/api/tasks", headers=bob).json() == []


def test_create_task_rejects_unknown_status(client, auth_headers, make_project) -> None:
    headers = auth_headers()
    project = make_project(headers)

    resp = client.post(
        "/api/tasks",
        json={"title": "x", "project_id": project["id"], "status": "blocked"},
        headers=headers,
    )

    assert resp.status_code == 400


def test_created_task_can_be_fetched_back(client, auth_headers, make_project, make_task) -> None:
    headers = auth_headers()
    project = make_project(headers)
    created = make_task(
        headers, project["id"], title="Report", description="Q3 numbers",
        status="in-progress", priority="high", due_date="2026-11-01",
    )

    fetched = client.get(f"/api/tasks/{created['id']}", headers=headers).json()

    assert fetched == created
    assert fetched["due_date"] == "2026-11-01"
    assert fetched["project_id"] == project["id"]


def test_list_tasks_filters_are_anded(client, auth_headers, make_project, make_task) -> None:
    headers = auth_headers()
    home = make_project(headers, name="Home")
    work = make_project(headers, name="Work")
    a = make_task(headers, home["id"], title="a", status="done", priority="high")
    make_task(headers, home["id"], title="b", status="done", priority="low")
    make_task(headers, work["id"], title="c", status="done", priority="high")
    make_task(headers, home["id"], title="d", status="in-progress", priority="high")

    resp = client.get(
        "/api/tasks",
        params={"project_id": home["id"], "status": "done", "priority": "high"},
        headers=headers,
    )

    assert [t["id"] for t in resp.json()] == [a["id"]]


def test_list_tasks_newest_first(client, auth_headers, make_project, make_task) -> None:
    headers = auth_headers()
    project = make_project(headers)
    first = make_task(headers, project["id"], title="first")
    second = make_task(headers, project["id"], title="second")

    listed = client.get("/api/tasks", headers=headers).json()

    assert [t["id"] for t in listed] == [second["id"], first["id"]]


def test_list_tasks_rejects_unknown_filter_value(client, auth_headers) -> None:
    resp = client.get("/api/tasks", params={"priority": "urgent"}, headers=auth_headers())

    assert resp.status_code == 400
    assert "priority" in resp.json()["error"]


def test_status_only_update_keeps_other_fields(client, auth_headers, make_project, make_task) -> None:
    headers = auth_headers()
    project = make_project(headers)
    task = make_task(
        headers, project["id"], title="Write", description="draft",
        priority="high", due_date="2026-12-24",
    )

    resp = client.put(f"/api/tasks/{task['id']}", json={"status": "done"}, headers=headers)

    assert resp.status_code == 200
    updated = resp.json()
    assert updated["status"] == "done"
    for field in ("title", "description", "priority", "due_date", "project_id", "created_at"):
        assert updated[field] == task[field]
    assert datetime.fromisoformat(updated["updated_at"]) >= datetime.fromisoformat(task["updated_at"])


def test_any_status_transition_is_allowed(client, auth_headers, make_project, make_task) -> None:
    headers = auth_headers()
    project = make_project(headers)
    task = make_task(headers, project["id"], status="done")

    for status in ("not-started", "in-progress", "done", "not-started"):
        resp = client.put(f"/api/tasks/{task['id']}", json={"status": status}, headers=headers)
        assert resp.json()["status"] == status


def test_update_task_can_clear_due_date(client, auth_headers, make_project, make_task) -> None:
    headers = auth_headers()
    project = make_project(headers)
    task = make_task(headers, project["id"], due_date="2026-12-24")

    resp = client.put(f"/api/tasks/{task['id']}", json={"due_date": None}, headers=headers)

    assert resp.json()["due_date"] is None


def test_update_task_rejects_empty_title(client, auth_headers, make_project, make_task) -> None:
    headers = auth_headers()
    project = make_project(headers)
    task = make_task(headers, project["id"])

    resp = client.put(f"/api/tasks/{task['id']}", json={"title": " "}, headers=headers)

    assert resp.status_code == 400
    assert client.get(f"/api/tasks/{task['id']}", headers=headers).json()["title"] == "Buy milk"


def test_tasks_are_isolated_between_users(client, auth_headers, make_project, make_task) -> None:
    alice = auth_headers("a@x.com", "Alice")
    bob = auth_headers("b@x.com", "Bob")
    project = make_project(alice)
    task = make_task(alice, project["id"])

    assert client.get("/api/tasks", headers=bob).json() == []
    assert client.get(f"/api/tasks/{task['id']}", headers=bob).status_code == 404
    assert client.put(
        f"/api/tasks/{task['id']}", json={"status": "done"}, headers=bob
    ).status_code == 404
    assert client.delete(f"/api/tasks/{task['id']}", headers=bob).status_code == 404

    assert client.get(f"/api/tasks/{task['id']}", headers=alice).json()["status"] == "not-started"


def test_delete_task(client, auth_headers, make_project, make_task) -> None:
    headers = auth_headers()
    project = make_project(headers)
    task = make_task(headers, project["id"])

    resp = client.delete(f"/api/tasks/{task['id']}", headers=headers)

    assert resp.status_code == 200
    assert resp.json() == {"message": "Task deleted successfully"}
    assert client.delete(f"/api/tasks/{task['id']}", headers=headers).status_code == 404
