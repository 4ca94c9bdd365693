from __future__ import annotations
from typing import Optional
import logging

from ..repositories.task_repository import TaskRepository
from ..services.event_publisher import EventPublisher
from .loading import load_task
from .snapshot import TaskSnapshot

logger = logging.getLogger(__name__)


class UpdateTaskUseCase:
    def __init__(self, task_repo: TaskRepository, publisher: EventPublisher):
        self.task_repo = task_repo
        self.publisher = publisher

    def execute(self, task_id: str, title: str, description: Optional[str] = None) -> TaskSnapshot:
        task = load_task(self.task_repo, task_id)
        task.update(title, description)
        self.task_repo.save(task)
        self.publisher.publish_events_from(task)
        logger.info("task updated id=%s", task.id)
        return TaskSnapshot.from_task(task)
