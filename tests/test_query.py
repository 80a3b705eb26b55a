import pytest

from tasksync.errors import AuthError, ServiceError
from tasksync.models import TaskStatus
from tasksync.principal import Principal
from tasksync.query import list_tasks_for_current_user

from .fakes import FailingTaskStore, FakeTaskStore, make_task


def test_unauthenticated_never_reaches_the_store():
    store = FakeTaskStore([make_task("alice", "A", 1)])

    with pytest.raises(AuthError) as excinfo:
        list_tasks_for_current_user(Principal.anonymous(), store)

    assert excinfo.value.message == "Unauthenticated"
    assert store.calls == []


def test_queries_store_with_principal_id():
    store = FakeTaskStore()

    list_tasks_for_current_user(Principal("alice"), store)

    assert store.calls == ["alice"]


@pytest.mark.parametrize("owner", ["alice", "bob", "carol"])
def test_returns_only_tasks_owned_by_principal(owner):
    tasks = [
        make_task("alice", "a1", 1),
        make_task("bob", "b1", 2),
        make_task("alice", "a2", 3),
        make_task("carol", "c1", 4),
        make_task("bob", "b2", 5),
    ]

    result = list_tasks_for_current_user(Principal(owner), FakeTaskStore(tasks))

    assert result
    assert all(t.owner_id == owner for t in result)
    created = [t.created_at for t in result]
    assert created == sorted(created, reverse=True)


def test_no_owned_tasks_is_an_empty_success():
    store = FakeTaskStore([make_task("bob", "b1", 1)])

    assert list_tasks_for_current_user(Principal("alice"), store) == []


def test_store_failure_is_not_masked_as_empty():
    store = FailingTaskStore()

    with pytest.raises(ServiceError):
        list_tasks_for_current_user(Principal("alice"), store)

    assert store.calls == ["alice"]


def test_anonymous_principal_has_no_id():
    principal = Principal.anonymous()

    assert not principal.is_authenticated()
    with pytest.raises(AuthError):
        principal.id()


def test_scenario_newest_first():
    store = FakeTaskStore([
        make_task("alice", "B", 1, status=TaskStatus.DONE),
        make_task("alice", "A", 2),
    ])

    result = list_tasks_for_current_user(Principal("alice"), store)

    assert [(t.title, t.status) for t in result] == [("A", TaskStatus.PENDING), ("B", TaskStatus.DONE)]
