from __future__ import annotations
import logging

from ..repositories.task_repository import TaskRepository
from ..services.event_publisher import EventPublisher
from .loading import load_task

logger = logging.getLogger(__name__)


class DeleteTaskUseCase:
    def __init__(self, task_repo: TaskRepository, publisher: EventPublisher):
        self.task_repo = task_repo
        self.publisher = publisher

    def execute(self, task_id: str) -> None:
        task = load_task(self.task_repo, task_id)
        # The aggregate refuses done tasks before the repository is touched
        task.delete()
        self.task_repo.delete(task)
        self.publisher.publish_events_from(task)
        logger.info("task deleted id=%s", task.id)
