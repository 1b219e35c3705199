# tests/test_tasks_api.py

import json
import logging

from fastapi.testclient import TestClient

from getitdone.main import app
from getitdone.routers.tasks import get_task_service


def create_task(client, **payload):
    response = client.post("/api/tasks", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["task"]


def list_ids(client, **params):
    response = client.get("/api/tasks", params=params)
    assert response.status_code == 200, response.text
    return [t["id"] for t in response.json()["tasks"]]


# ============================================================
# CREATE / READ
# ============================================================

def test_create_applies_defaults(client):
    task = create_task(client, title="Buy milk", priority=3)

    assert task["id"]
    assert task["title"] == "Buy milk"
    assert task["priority"] == 3
    assert task["status"] == "todo"
    assert task["dueDate"] is None
    assert task["description"] == ""
    assert task["tags"] == []
    assert task["projectId"] is None
    assert task["isRecurring"] is False
    assert task["createdAt"]
    assert task["updatedAt"]


def test_round_trip(client):
    project = client.post("/api/projects", json={"name": "Home"}).json()["project"]
    tag = client.post("/api/tags", json={"name": "errand"}).json()["tag"]
    payload = {
        "title": "Fix the sink",
        "description": "Kitchen, not bathroom",
        "dueDate": "2026-10-24T09:30:00",
        "priority": 1,
        "status": "in_progress",
        "projectId": project["id"],
        "tags": [tag["id"]],
        "isRecurring": True,
        "recurrenceRule": "FREQ=WEEKLY",
    }
    created = create_task(client, **payload)

    response = client.get(f"/api/tasks/{created['id']}")
    assert response.status_code == 200
    fetched = response.json()["task"]
    for key, value in payload.items():
        assert fetched[key] == value
    assert fetched["id"] == created["id"]
    assert fetched["createdAt"] == created["createdAt"]


def test_buy_milk_is_active_and_never_overdue(client):
    task = create_task(client, title="Buy milk", priority=3)

    fetched = client.get(f"/api/tasks/{task['id']}").json()["task"]
    assert fetched["status"] == "todo"
    assert fetched["dueDate"] is None
    assert list_ids(client, view="active") == [task["id"]]
    assert list_ids(client, view="overdue") == []


def test_title_is_trimmed(client):
    task = create_task(client, title="  Water plants  ")
    assert task["title"] == "Water plants"


def test_duplicate_tags_are_collapsed(client):
    tag = client.post("/api/tags", json={"name": "home"}).json()["tag"]
    task = create_task(client, title="Sweep", tags=[tag["id"], tag["id"]])
    assert task["tags"] == [tag["id"]]


def test_get_unknown_task_returns_404(client):
    response = client.get("/api/tasks/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": {"message": "Task not found"}}


# ============================================================
# VALIDATION
# ============================================================

def test_missing_title_is_rejected(client):
    response = client.post("/api/tasks", json={"priority": 2})
    assert response.status_code == 400
    assert "title" in response.json()["error"]["message"]


def test_blank_title_is_rejected(client):
    response = client.post("/api/tasks", json={"title": "   "})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "title: title is required"


def test_priority_out_of_range_is_rejected(client):
    for priority in (0, 5):
        response = client.post("/api/tasks", json={"title": "x", "priority": priority})
        assert response.status_code == 400
        assert "priority" in response.json()["error"]["message"]


def test_unknown_status_is_rejected(client):
    response = client.post("/api/tasks", json={"title": "x", "status": "blocked"})
    assert response.status_code == 400
    assert "status" in response.json()["error"]["message"]


def test_malformed_due_date_is_rejected(client):
    response = client.post("/api/tasks", json={"title": "x", "dueDate": "next tuesday"})
    assert response.status_code == 400
    assert "dueDate" in response.json()["error"]["message"]


def test_unknown_project_is_rejected(client):
    response = client.post("/api/tasks", json={"title": "x", "projectId": "nope"})
    assert response.status_code == 400
    assert "projectId" in response.json()["error"]["message"]


def test_unknown_tag_is_rejected(client):
    response = client.post("/api/tasks", json={"title": "x", "tags": ["nope"]})
    assert response.status_code == 400
    assert "nope" in response.json()["error"]["message"]


def test_invalid_status_filter_is_rejected(client):
    response = client.get("/api/tasks", params={"status": "blocked"})
    assert response.status_code == 400
    assert "error" in response.json()


# ============================================================
# UPDATE / DELETE
# ============================================================

def test_overdue_task_moves_to_completed(client):
    task = create_task(client, title="Pay rent", dueDate="2026-10-20")
    assert list_ids(client, view="overdue") == [task["id"]]

    response = client.patch(f"/api/tasks/{task['id']}", json={"status": "done"})
    assert response.status_code == 200
    assert response.json()["task"]["status"] == "done"

    assert list_ids(client, view="overdue") == []
    assert list_ids(client, view="completed") == [task["id"]]


def test_patch_only_touches_given_fields(client):
    task = create_task(client, title="Draft", description="keep me", priority=4)

    updated = client.patch(f"/api/tasks/{task['id']}", json={"title": "Final"}).json()["task"]
    assert updated["title"] == "Final"
    assert updated["description"] == "keep me"
    assert updated["priority"] == 4
    assert updated["createdAt"] == task["createdAt"]


def test_patch_null_clears_due_date_and_references(client):
    project = client.post("/api/projects", json={"name": "Work"}).json()["project"]
    task = create_task(client, title="Ship", dueDate="2026-10-22", projectId=project["id"])

    response = client.patch(f"/api/tasks/{task['id']}", json={"dueDate": None, "projectId": None})
    assert response.status_code == 200
    updated = response.json()["task"]
    assert updated["dueDate"] is None
    assert updated["projectId"] is None


def test_patch_null_priority_is_rejected(client):
    task = create_task(client, title="Ship")
    response = client.patch(f"/api/tasks/{task['id']}", json={"priority": None})
    assert response.status_code == 400
    assert "priority" in response.json()["error"]["message"]


def test_patch_replaces_tags(client):
    a = client.post("/api/tags", json={"name": "a"}).json()["tag"]
    b = client.post("/api/tags", json={"name": "b"}).json()["tag"]
    task = create_task(client, title="Tagged", tags=[a["id"]])

    updated = client.patch(f"/api/tasks/{task['id']}", json={"tags": [b["id"]]}).json()["task"]
    assert updated["tags"] == [b["id"]]


def test_patch_unknown_task_returns_404(client):
    response = client.patch("/api/tasks/missing", json={"title": "x"})
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "Task not found"


def test_delete_task(client):
    task = create_task(client, title="Temporary")

    response = client.delete(f"/api/tasks/{task['id']}")
    assert response.status_code == 204
    assert response.content == b""

    assert client.get(f"/api/tasks/{task['id']}").status_code == 404
    assert client.delete(f"/api/tasks/{task['id']}").status_code == 404


# ============================================================
# LISTING
# ============================================================

def test_list_filters_and_sorts(client):
    home = client.post("/api/projects", json={"name": "Home"}).json()["project"]
    a = create_task(client, title="Mow lawn", priority=3, projectId=home["id"], dueDate="2026-10-23")
    b = create_task(client, title="Buy LAWN seed", priority=1, projectId=home["id"])
    create_task(client, title="Email boss", priority=1)

    assert list_ids(client, projectId=home["id"], sortBy="priority", sortOrder="asc") == [b["id"], a["id"]]
    assert list_ids(client, search="lawn", sortBy="dueDate", sortOrder="asc") == [a["id"], b["id"]]
    assert list_ids(client, view="thisWeek") == [a["id"]]


def test_list_defaults_to_newest_first(client):
    first = create_task(client, title="first")
    second = create_task(client, title="second")
    assert list_ids(client) == [second["id"], first["id"]]


def test_unknown_view_and_sort_are_ignored(client):
    first = create_task(client, title="first")
    second = create_task(client, title="second")
    assert list_ids(client, view="someday", sortBy="title") == [second["id"], first["id"]]


def test_status_filter_combines_with_view(client):
    todo = create_task(client, title="todo")
    create_task(client, title="started", status="in_progress")
    assert list_ids(client, view="active", status="todo") == [todo["id"]]


# ============================================================
# ERRORS
# ============================================================

def test_unexpected_error_returns_500_envelope():
    class BrokenService:
        def get_by_id(self, task_id):
            raise RuntimeError("database exploded")

    app.dependency_overrides[get_task_service] = lambda: BrokenService()
    try:
        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/api/tasks/anything")
    finally:
        del app.dependency_overrides[get_task_service]

    assert response.status_code == 500
    assert response.json() == {"error": {"message": "Internal Server Error"}}


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert "message" in response.json()["error"]


# ============================================================
# ACCESS LOG
# ============================================================

def access_records(caplog):
    return [r for r in caplog.records if r.name == "getitdone.access"]


def test_access_log_level_follows_status(client, caplog):
    with caplog.at_level(logging.INFO, logger="getitdone.access"):
        client.post("/api/tasks", json={"title": "ok"})
        client.get("/api/tasks/missing")

    created, missing = access_records(caplog)
    assert created.levelno == logging.INFO
    assert json.loads(created.getMessage())["status"] == 201
    assert missing.levelno == logging.WARNING
    assert json.loads(missing.getMessage())["path"] == "/api/tasks/missing"


def test_access_log_records_unhandled_errors_as_error(caplog):
    class BrokenService:
        def delete(self, task_id):
            raise RuntimeError("disk full")

    app.dependency_overrides[get_task_service] = lambda: BrokenService()
    try:
        with caplog.at_level(logging.INFO, logger="getitdone.access"):
            TestClient(app, raise_server_exceptions=False).delete("/api/tasks/x")
    finally:
        del app.dependency_overrides[get_task_service]

    (record,) = access_records(caplog)
    assert record.levelno == logging.ERROR
    assert json.loads(record.getMessage())["status"] == 500
