from datetime import datetime

from tasksync.main import app
from tasksync.models import TaskStatus
from tasksync.store import TaskStore, get_task_store

from .fakes import FailingTaskStore, FakeTaskStore, as_utc, at, auth_headers


def test_unauthenticated_gets_401_message(client):
    response = client.get("/api/tasks")

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthenticated"}


def test_invalid_token_gets_401(client):
    response = client.get("/api/tasks", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json() == {"message": "Unauthenticated"}


def test_unauthenticated_request_never_queries_the_store(client):
    store = FakeTaskStore()
    app.dependency_overrides[get_task_store] = lambda: store

    response = client.get("/api/tasks")

    assert response.status_code == 401
    assert store.calls == []


def test_lists_only_own_tasks_newest_first(client, db, make_user):
    alice = make_user("alice@example.com")
    bob = make_user("bob@example.com")
    store = TaskStore(db)
    store.add(owner_id=alice.id, title="B", status=TaskStatus.DONE, created_at=at(1))
    store.add(owner_id=bob.id, title="not mine", created_at=at(2))
    store.add(owner_id=alice.id, title="A", created_at=at(3))

    response = client.get("/api/tasks", headers=auth_headers(alice))

    assert response.status_code == 200
    body = response.json()
    assert [(t["title"], t["status"]) for t in body] == [("A", "pending"), ("B", "done")]
    assert {t["ownerId"] for t in body} == {alice.id}
    assert set(body[0]) == {"id", "title", "status", "ownerId", "createdAt"}
    created = [as_utc(datetime.fromisoformat(t["createdAt"].replace("Z", "+00:00"))) for t in body]
    assert created == [at(3), at(1)]


def test_no_tasks_is_an_empty_array(client, make_user):
    alice = make_user("alice@example.com")

    response = client.get("/api/tasks", headers=auth_headers(alice))

    assert response.status_code == 200
    assert response.json() == []


def test_token_cookie_is_accepted(client, db, make_user):
    alice = make_user("alice@example.com")
    TaskStore(db).add(owner_id=alice.id, title="A", created_at=at(1))
    token = auth_headers(alice)["Authorization"].split(" ", 1)[1]
    response = client.get("/api/tasks", headers={"Cookie": f"token={token}"})

    assert response.status_code == 200
    assert [t["title"] for t in response.json()] == ["A"]


def test_store_failure_is_503_not_empty(client, make_user):
    alice = make_user("alice@example.com")
    store = FailingTaskStore()
    app.dependency_overrides[get_task_store] = lambda: store

    response = client.get("/api/tasks", headers=auth_headers(alice))

    assert response.status_code == 503
    assert response.json() == {"message": "Task store unavailable"}
    assert store.calls == [alice.id]


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
