from datetime import date

import pytest

from task_tracker.errors import NotFoundError, ValidationError
from task_tracker.models import Task, TaskStatus, User
from task_tracker.schemas.task import TaskCreate, TaskUpdate
from task_tracker.services import auth as auth_service
from task_tracker.services import tasks as task_service

from .conftest import PASSWORD


def _task_payload(category_id, **overrides):
    payload = {
        "title": "Buy milk",
        "description": "Semi-skimmed, two litres",
        "categoryId": category_id,
        "dueDate": "2025-01-01",
        "status": "Todo",
    }
    payload.update(overrides)
    return payload


def _create(client, headers, category_id, **overrides):
    response = client.post("/api/tasks", json=_task_payload(category_id, **overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["task"]


def test_alice_creates_and_lists_her_task(client, db, alice, category):
    created = _create(client, alice, category.id)

    response = client.get("/api/tasks", headers=alice)

    assert response.status_code == 200
    tasks = response.json()
    assert len(tasks) == 1
    task = tasks[0]
    alice_id = db.query(User).filter(User.email == "alice@example.com").one().id
    assert task["id"] == created["id"]
    assert task["userId"] == alice_id
    assert task["title"] == "Buy milk"
    assert task["description"] == "Semi-skimmed, two litres"
    assert task["categoryId"] == category.id
    assert task["dueDate"] == "2025-01-01"
    assert task["status"] == "Todo"
    assert task["Category"] == {"id": category.id, "name": "Groceries"}


def test_status_defaults_to_todo(client, alice, category):
    payload = _task_payload(category.id)
    del payload["status"]

    response = client.post("/api/tasks", json=payload, headers=alice)

    assert response.status_code == 201
    assert response.json()["task"]["status"] == "Todo"


def test_client_supplied_owner_is_ignored(client, db, alice, carol, category):
    carol_id = db.query(User).filter(User.email == "carol@example.com").one().id

    task = _create(client, alice, category.id, userId=carol_id)

    assert task["userId"] != carol_id
    assert client.get("/api/tasks", headers=carol).json() == []


def test_other_users_never_see_my_tasks(client, alice, carol, category):
    _create(client, alice, category.id)
    _create(client, alice, category.id, title="Walk dog")
    mine = _create(client, carol, category.id, title="Carol's")

    carol_tasks = client.get("/api/tasks", headers=carol).json()

    assert [t["id"] for t in carol_tasks] == [mine["id"]]
    assert len(client.get("/api/tasks", headers=alice).json()) == 2


@pytest.mark.parametrize("missing", ["title", "description", "categoryId", "dueDate"])
def test_create_requires_every_field(client, alice, category, missing):
    payload = _task_payload(category.id)
    del payload[missing]

    response = client.post("/api/tasks", json=payload, headers=alice)

    assert response.status_code == 400
    assert response.json()["message"]


def test_create_rejects_blank_title(client, alice, category):
    response = client.post("/api/tasks", json=_task_payload(category.id, title="   "), headers=alice)

    assert response.status_code == 400
    assert response.json() == {"message": "Title is required"}


def test_create_rejects_unknown_category(client, alice):
    response = client.post("/api/tasks", json=_task_payload("no-such-category"), headers=alice)

    assert response.status_code == 400
    assert response.json() == {"message": "Category does not exist"}


def test_create_rejects_unknown_status(client, alice, category):
    response = client.post("/api/tasks", json=_task_payload(category.id, status="Blocked"), headers=alice)

    assert response.status_code == 400


def test_patch_status_only_keeps_other_fields(client, alice, category):
    task = _create(client, alice, category.id)

    response = client.patch(f"/api/tasks/{task['id']}", json={"status": "Done"}, headers=alice)

    assert response.status_code == 200
    updated = response.json()["task"]
    assert updated["status"] == "Done"
    assert updated["title"] == task["title"]
    assert updated["dueDate"] == task["dueDate"]
    assert updated["categoryId"] == category.id


def test_any_status_transition_is_allowed(client, alice, category):
    task = _create(client, alice, category.id, status="Done")

    for status in ("Todo", "Done", "Doing", "Todo"):
        response = client.patch(f"/api/tasks/{task['id']}", json={"status": status}, headers=alice)
        assert response.json()["task"]["status"] == status


def test_patch_rejects_explicit_null_and_blank(client, alice, category):
    task = _create(client, alice, category.id)

    null_status = client.patch(f"/api/tasks/{task['id']}", json={"status": None}, headers=alice)
    blank_title = client.patch(f"/api/tasks/{task['id']}", json={"title": ""}, headers=alice)
    bad_category = client.patch(f"/api/tasks/{task['id']}", json={"categoryId": "missing"}, headers=alice)

    assert null_status.status_code == 400
    assert blank_title.status_code == 400
    assert bad_category.status_code == 400
    assert client.get(f"/api/tasks/{task['id']}", headers=alice).json()["title"] == "Buy milk"


def test_non_owner_update_and_delete_look_like_missing_task(client, alice, carol, category):
    task = _create(client, alice, category.id)

    foreign_patch = client.patch(f"/api/tasks/{task['id']}", json={"status": "Done"}, headers=carol)
    missing_patch = client.patch("/api/tasks/does-not-exist", json={"status": "Done"}, headers=carol)
    foreign_delete = client.delete(f"/api/tasks/{task['id']}", headers=carol)
    missing_delete = client.delete("/api/tasks/does-not-exist", headers=carol)
    foreign_get = client.get(f"/api/tasks/{task['id']}", headers=carol)

    for response in (foreign_patch, missing_patch, foreign_delete, missing_delete, foreign_get):
        assert response.status_code == 404
        assert response.json() == {"message": "Task not found"}

    assert client.get(f"/api/tasks/{task['id']}", headers=alice).json()["status"] == "Todo"


def test_delete_twice_is_not_found_both_times_after_first(client, alice, category):
    task = _create(client, alice, category.id)

    first = client.delete(f"/api/tasks/{task['id']}", headers=alice)
    second = client.delete(f"/api/tasks/{task['id']}", headers=alice)
    third = client.delete(f"/api/tasks/{task['id']}", headers=alice)

    assert first.status_code == 204
    assert second.status_code == third.status_code == 404
    assert client.get("/api/tasks", headers=alice).json() == []


def test_update_service_applies_only_fields_that_were_sent(db, category):
    user = auth_service.register(db, "Alice", "alice@example.com", PASSWORD)
    task = task_service.create_task(
        db,
        user.id,
        TaskCreate(title="Buy milk", description="Two litres", category_id=category.id, due_date=date(2025, 1, 1)),
    )

    update = TaskUpdate.model_validate({"dueDate": "2025-02-03"})
    updated = task_service.update_task(db, user.id, task.id, update)

    assert update.model_fields_set == {"due_date"}
    assert updated.due_date == date(2025, 2, 3)
    assert updated.status == TaskStatus.TODO
    assert updated.description == "Two litres"


def test_update_service_raises_not_found_for_other_owner(db, category):
    owner = auth_service.register(db, "Alice", "alice@example.com", PASSWORD)
    other = auth_service.register(db, "Carol", "carol@example.com", PASSWORD)
    task = task_service.create_task(
        db,
        owner.id,
        TaskCreate(title="Buy milk", description="Two litres", category_id=category.id, due_date=date(2025, 1, 1)),
    )

    with pytest.raises(NotFoundError):
        task_service.update_task(db, other.id, task.id, TaskUpdate(status=TaskStatus.DONE))
    with pytest.raises(NotFoundError):
        task_service.delete_task(db, other.id, task.id)
    assert db.query(Task).filter(Task.id == task.id).one().status == TaskStatus.TODO


def test_create_service_requires_existing_category(db):
    user = auth_service.register(db, "Alice", "alice@example.com", PASSWORD)

    with pytest.raises(ValidationError):
        task_service.create_task(
            db,
            user.id,
            TaskCreate(title="Buy milk", description="x", category_id="nope", due_date=date(2025, 1, 1)),
        )


def test_padded_text_round_trips_unchanged(client, alice, category):
    created = _create(client, alice, category.id, title="  Buy milk ", description=" Two litres\n")

    listed = client.get("/api/tasks", headers=alice).json()[0]

    assert created["title"] == listed["title"] == "  Buy milk "
    assert listed["description"] == " Two litres\n"

    patched = client.patch(f"/api/tasks/{created['id']}", json={"title": " Oat milk"}, headers=alice)
    assert patched.json()["task"]["title"] == " Oat milk"


def test_new_rows_get_timezone_aware_timestamps():
    task = Task(title="t", description="d", due_date=date(2025, 1, 1), user_id="u")

    assert task.created_at.tzinfo is not None
    assert task.updated_at.tzinfo is not None
