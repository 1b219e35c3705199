# tests/test_catalog_api.py

import pytest


def create(client, resource, key, **payload):
    response = client.post(f"/api/{resource}", json=payload)
    assert response.status_code == 201, response.text
    return response.json()[key]


def get_task(client, task_id):
    response = client.get(f"/api/tasks/{task_id}")
    assert response.status_code == 200
    return response.json()["task"]


# ============================================================
# CRUD
# ============================================================

@pytest.mark.parametrize(
    "resource,key,payload,field,changed",
    [
        ("projects", "project", {"name": "Garden"}, "name", "Backyard"),
        ("categories", "category", {"name": "Chores"}, "name", "Housework"),
        ("goals", "goal", {"title": "Run 10k"}, "title", "Run a half marathon"),
        ("tags", "tag", {"name": "quick"}, "name", "tiny"),
    ],
)
def test_catalog_crud(client, resource, key, payload, field, changed):
    item = create(client, resource, key, **payload)
    assert item["id"]
    assert item["createdAt"]

    listed = client.get(f"/api/{resource}").json()[resource]
    assert [i["id"] for i in listed] == [item["id"]]

    response = client.patch(f"/api/{resource}/{item['id']}", json={field: changed})
    assert response.status_code == 200
    assert response.json()[key][field] == changed

    assert client.get(f"/api/{resource}/{item['id']}").json()[key][field] == changed

    assert client.delete(f"/api/{resource}/{item['id']}").status_code == 204
    response = client.get(f"/api/{resource}/{item['id']}")
    assert response.status_code == 404
    assert response.json()["error"]["message"].endswith("not found")


def test_category_color_defaults(client):
    category = create(client, "categories", "category", name="Errands")
    assert category["color"] == "#6b7280"


def test_categories_are_listed_by_name(client):
    create(client, "categories", "category", name="Work")
    create(client, "categories", "category", name="Errands")
    names = [c["name"] for c in client.get("/api/categories").json()["categories"]]
    assert names == ["Errands", "Work"]


def test_goal_target_date(client):
    goal = create(client, "goals", "goal", title="Learn piano", targetDate="2026-12-31")
    assert goal["targetDate"] == "2026-12-31T00:00:00"

    response = client.patch(f"/api/goals/{goal['id']}", json={"targetDate": None})
    assert response.json()["goal"]["targetDate"] is None


def test_blank_name_is_rejected(client):
    response = client.post("/api/projects", json={"name": ""})
    assert response.status_code == 400
    assert response.json()["error"]["message"] == "name: name is required"


def test_unknown_items_return_404(client):
    for resource, label in (
        ("projects", "Project"),
        ("categories", "Category"),
        ("goals", "Goal"),
        ("tags", "Tag"),
    ):
        assert client.patch(f"/api/{resource}/missing", json={}).status_code == 404
        response = client.delete(f"/api/{resource}/missing")
        assert response.status_code == 404
        assert response.json() == {"error": {"message": f"{label} not found"}}


# ============================================================
# DELETION KEEPS TASKS
# ============================================================

def test_deleting_project_detaches_tasks(client):
    project = create(client, "projects", "project", name="Move house")
    task = create(client, "tasks", "task", title="Pack books", projectId=project["id"])

    assert client.delete(f"/api/projects/{project['id']}").status_code == 204

    assert get_task(client, task["id"])["projectId"] is None


def test_deleting_category_and_goal_detaches_tasks(client):
    category = create(client, "categories", "category", name="Health")
    goal = create(client, "goals", "goal", title="Get fit")
    task = create(
        client, "tasks", "task",
        title="Book physio", categoryId=category["id"], goalId=goal["id"],
    )

    client.delete(f"/api/categories/{category['id']}")
    detached = get_task(client, task["id"])
    assert detached["categoryId"] is None
    assert detached["goalId"] == goal["id"]

    client.delete(f"/api/goals/{goal['id']}")
    assert get_task(client, task["id"])["goalId"] is None


def test_deleting_tag_removes_it_from_tasks(client):
    keep = create(client, "tags", "tag", name="keep")
    drop = create(client, "tags", "tag", name="drop")
    task = create(client, "tasks", "task", title="Tagged", tags=[keep["id"], drop["id"]])

    assert client.delete(f"/api/tags/{drop['id']}").status_code == 204

    assert get_task(client, task["id"])["tags"] == [keep["id"]]
    assert client.get("/api/tasks", params={"tag": drop["id"]}).json()["tasks"] == []


def test_deleting_task_keeps_its_tags(client):
    tag = create(client, "tags", "tag", name="solo")
    task = create(client, "tasks", "task", title="Lonely", tags=[tag["id"]])

    assert client.delete(f"/api/tasks/{task['id']}").status_code == 204
    assert client.get(f"/api/tags/{tag['id']}").status_code == 200
