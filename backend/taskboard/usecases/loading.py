from __future__ import annotations

from ..domain.task import Task
from ..domain.task_id import TaskId
from ..errors import TaskNotFoundError
from ..repositories.task_repository import TaskRepository


def load_task(repo: TaskRepository, raw_id: str) -> Task:
    """Parse the id and fetch the task, raising before any mutation happens."""
    task = repo.find_by_id(TaskId.from_string(raw_id))
    if task is None:
        raise TaskNotFoundError(raw_id)
    return task
