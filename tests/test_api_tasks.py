"""Tests for task CRUD endpoints."""


def _create(client, **fields):
    body = {"title": "Write report", **fields}
    response = client.post("/api/tasks/", json=body)
    assert response.status_code == 201
    return response.json()


def test_list_tasks_empty(client):
    response = client.get("/api/tasks/")
    assert response.status_code == 200
    assert response.json() == []


def test_create_task_defaults(client):
    task = _create(client)
    assert task["id"] is not None
    assert task["status"] == "pending"
    assert task["priority"] == "medium"
    assert task["description"] is None
    assert task["category_id"] is None


def test_created_task_is_listed(client):
    task = _create(client, description="Q3 numbers", priority="high", due_date="2030-01-15")
    listed = client.get("/api/tasks/").json()
    assert [t["id"] for t in listed] == [task["id"]]
    assert listed[0]["due_date"] == "2030-01-15"
    assert listed[0]["priority"] == "high"


def test_create_task_rejects_blank_title(client):
    response = client.post("/api/tasks/", json={"title": "   "})
    assert response.status_code == 422


def test_create_task_rejects_unknown_status(client):
    response = client.post("/api/tasks/", json={"title": "x", "status": "done"})
    assert response.status_code == 422


def test_get_task_not_found(client):
    assert client.get("/api/tasks/9999").status_code == 404


def test_update_task(client):
    task = _create(client, description="draft")
    response = client.patch(
        f"/api/tasks/{task['id']}", json={"status": "in-progress", "description": None}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "in-progress"
    assert data["description"] is None
    assert data["title"] == "Write report"


def test_update_task_ignores_null_title(client):
    task = _create(client)
    response = client.patch(f"/api/tasks/{task['id']}", json={"title": None})
    assert response.status_code == 200
    assert response.json()["title"] == "Write report"


def test_update_task_not_found(client):
    response = client.patch("/api/tasks/9999", json={"status": "completed"})
    assert response.status_code == 404


def test_delete_task(client):
    task = _create(client)
    response = client.delete(f"/api/tasks/{task['id']}")
    assert response.status_code == 200
    assert response.json()["status"] == "deleted"
    assert client.get(f"/api/tasks/{task['id']}").status_code == 404


def test_delete_task_not_found(client):
    assert client.delete("/api/tasks/9999").status_code == 404


def test_timestamps_carry_utc_offset(client):
    task = _create(client)
    assert task["created_at"].endswith("+00:00")

    fetched = client.get(f"/api/tasks/{task['id']}").json()
    assert fetched["created_at"].endswith("+00:00")
    assert fetched["updated_at"].endswith("+00:00")
