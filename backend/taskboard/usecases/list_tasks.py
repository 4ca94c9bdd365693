from __future__ import annotations
from typing import List, Optional

from ..domain.filters import TaskFilterCriteria
from ..repositories.task_repository import TaskRepository
from .snapshot import TaskSnapshot


class ListTasksUseCase:
    def __init__(self, task_repo: TaskRepository):
        self.task_repo = task_repo

    def execute(self, criteria: Optional[TaskFilterCriteria] = None) -> List[TaskSnapshot]:
        return [TaskSnapshot.from_task(t) for t in self.task_repo.find_all(criteria)]
