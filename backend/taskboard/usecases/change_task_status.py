from __future__ import annotations
import logging

from ..domain.enums import TaskStatus
from ..repositories.task_repository import TaskRepository
from ..services.event_publisher import EventPublisher
from .loading import load_task
from .snapshot import TaskSnapshot

logger = logging.getLogger(__name__)


class ChangeTaskStatusUseCase:
    def __init__(self, task_repo: TaskRepository, publisher: EventPublisher):
        self.task_repo = task_repo
        self.publisher = publisher

    def execute(self, task_id: str, status: str) -> TaskSnapshot:
        task = load_task(self.task_repo, task_id)
        new_status = TaskStatus.from_string(status)
        old_status = task.status
        task.change_status(new_status)
        self.task_repo.save(task)
        self.publisher.publish_events_from(task)
        logger.info("task status changed id=%s %s -> %s", task.id, old_status.value, new_status.value)
        return TaskSnapshot.from_task(task)
