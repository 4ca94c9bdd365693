from types import SimpleNamespace
import pytest

from taskboard.domain.filters import TaskFilterCriteria
from taskboard.domain.task_id import TaskId
from taskboard.errors import (
    InvalidArgumentError,
    InvalidStatusTransitionError,
    TaskCannotBeDeletedError,
    TaskNotFoundError,
)
from taskboard.usecases.change_task_status import ChangeTaskStatusUseCase
from taskboard.usecases.create_task import CreateTaskUseCase
from taskboard.usecases.delete_task import DeleteTaskUseCase
from taskboard.usecases.get_task import GetTaskByIdUseCase
from taskboard.usecases.list_tasks import ListTasksUseCase
from taskboard.usecases.task_history import GetTaskHistoryUseCase
from taskboard.usecases.update_task import UpdateTaskUseCase


@pytest.fixture()
def usecases(task_repo, publisher, event_store):
    return SimpleNamespace(
        create=CreateTaskUseCase(task_repo, publisher),
        update=UpdateTaskUseCase(task_repo, publisher),
        change_status=ChangeTaskStatusUseCase(task_repo, publisher),
        delete=DeleteTaskUseCase(task_repo, publisher),
        get=GetTaskByIdUseCase(task_repo),
        list=ListTasksUseCase(task_repo),
        history=GetTaskHistoryUseCase(event_store),
    )


def test_create_persists_and_publishes(usecases, task_repo, event_store):
    task_id = usecases.create.execute("  Task A  ")

    snap = usecases.get.execute(task_id)
    assert snap.title == "Task A"
    assert snap.status == "todo"
    assert snap.description is None
    assert [e.event_name for e in event_store.get_events_for_aggregate(task_id)] == ["TaskCreated"]
    assert task_repo.find_by_id(TaskId(task_id)).recorded_events() == []


def test_create_with_invalid_title_saves_nothing(usecases, task_repo, event_store):
    with pytest.raises(InvalidArgumentError):
        usecases.create.execute("   ")
    assert task_repo.count() == 0
    assert event_store.count() == 0


def test_update_returns_snapshot(usecases):
    task_id = usecases.create.execute("Draft", "first")
    snap = usecases.update.execute(task_id, "Final", None)
    assert snap.title == "Final"
    assert snap.description is None
    assert snap.updated_at >= snap.created_at


def test_full_lifecycle_history(usecases):
    task_id = usecases.create.execute("Lifecycle")
    usecases.change_status.execute(task_id, "in_progress")
    usecases.change_status.execute(task_id, "todo")
    usecases.delete.execute(task_id)

    history = usecases.history.execute(task_id)
    assert [e.event_name for e in history] == ["TaskCreated", "TaskStatusChanged", "TaskStatusChanged", "TaskDeleted"]
    assert history[-1].payload == {"title": "Lifecycle", "status": "todo"}


def test_change_status_straight_to_done_is_rejected(usecases, event_store):
    task_id = usecases.create.execute("Skip ahead")
    with pytest.raises(InvalidStatusTransitionError):
        usecases.change_status.execute(task_id, "done")
    assert usecases.get.execute(task_id).status == "todo"
    assert len(event_store.get_events_for_aggregate(task_id)) == 1


def test_change_status_rejects_unknown_value(usecases):
    task_id = usecases.create.execute("Odd status")
    with pytest.raises(InvalidArgumentError):
        usecases.change_status.execute(task_id, "archived")
    assert usecases.get.execute(task_id).status == "todo"


def test_delete_done_task_fails_and_keeps_it(usecases, event_store):
    task_id = usecases.create.execute("Finished")
    usecases.change_status.execute(task_id, "in_progress")
    usecases.change_status.execute(task_id, "done")

    with pytest.raises(TaskCannotBeDeletedError):
        usecases.delete.execute(task_id)

    assert usecases.get.execute(task_id).status == "done"
    assert "TaskDeleted" not in [e.event_name for e in event_store.get_events_for_aggregate(task_id)]


def test_deleted_task_is_gone_but_history_remains(usecases, task_repo):
    """Scenario E"""
    task_id = usecases.create.execute("Temporary")
    usecases.delete.execute(task_id)

    assert task_repo.find_by_id(TaskId(task_id)) is None
    with pytest.raises(TaskNotFoundError):
        usecases.get.execute(task_id)
    assert usecases.history.execute(task_id)[-1].event_name == "TaskDeleted"


def test_list_with_status_filter(usecases):
    """Scenario F"""
    ids = [usecases.create.execute(f"Task {i}") for i in range(3)]
    usecases.change_status.execute(ids[1], "in_progress")

    in_progress = usecases.list.execute(TaskFilterCriteria.from_query(status="in_progress"))
    assert [s.id for s in in_progress] == [ids[1]]
    assert [s.id for s in usecases.list.execute()] == ids


@pytest.mark.parametrize("op", ["get", "update", "change_status", "delete"])
def test_unknown_id_raises_not_found(usecases, op):
    missing = TaskId.generate().value
    call = {
        "get": lambda: usecases.get.execute(missing),
        "update": lambda: usecases.update.execute(missing, "x"),
        "change_status": lambda: usecases.change_status.execute(missing, "todo"),
        "delete": lambda: usecases.delete.execute(missing),
    }[op]
    with pytest.raises(TaskNotFoundError):
        call()


@pytest.mark.parametrize("op", ["get", "update", "history"])
def test_malformed_id_is_invalid_argument(usecases, op):
    call = {
        "get": lambda: usecases.get.execute("nope"),
        "update": lambda: usecases.update.execute("nope", "x"),
        "history": lambda: usecases.history.execute("nope"),
    }[op]
    with pytest.raises(InvalidArgumentError):
        call()


def test_filter_rejects_unknown_status():
    with pytest.raises(InvalidArgumentError):
        TaskFilterCriteria.from_query(status="blocked")
