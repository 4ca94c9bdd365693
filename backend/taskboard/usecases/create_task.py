from __future__ import annotations
from typing import Optional
import logging

from ..domain.task import Task
from ..domain.task_id import TaskId
from ..repositories.task_repository import TaskRepository
from ..services.event_publisher import EventPublisher

logger = logging.getLogger(__name__)


class CreateTaskUseCase:
    def __init__(self, task_repo: TaskRepository, publisher: EventPublisher):
        self.task_repo = task_repo
        self.publisher = publisher

    def execute(self, title: str, description: Optional[str] = None) -> str:
        task = Task.create(TaskId.generate(), title, description)
        self.task_repo.save(task)
        self.publisher.publish_events_from(task)
        logger.info("task created id=%s", task.id)
        return task.id.value
