from __future__ import annotations

from ..repositories.task_repository import TaskRepository
from .loading import load_task
from .snapshot import TaskSnapshot


class GetTaskByIdUseCase:
    def __init__(self, task_repo: TaskRepository):
        self.task_repo = task_repo

    def execute(self, task_id: str) -> TaskSnapshot:
        return TaskSnapshot.from_task(load_task(self.task_repo, task_id))
