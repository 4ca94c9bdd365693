"""Task aggregate root.

Every mutating method validates first, then mutates, stamps ``updated_at`` and
records exactly one domain event. A failed call leaves the task untouched.
"""
from __future__ import annotations
from datetime import datetime, timezone
from typing import List, Optional

from ..errors import InvalidArgumentError, InvalidStatusTransitionError, TaskCannotBeDeletedError
from .enums import TaskStatus
from .events import DomainEvent, EventRecorder, TaskCreated, TaskDeleted, TaskStatusChanged, TaskUpdated
from .task_id import TaskId

TITLE_MAX_LENGTH = 255


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_title(title: str) -> str:
    trimmed = (title or "").strip()
    if trimmed == "":
        raise InvalidArgumentError("Task title cannot be empty")
    if len(trimmed) > TITLE_MAX_LENGTH:
        raise InvalidArgumentError(f"Task title cannot exceed {TITLE_MAX_LENGTH} characters")
    return trimmed


class Task:
    def __init__(
        self,
        id: TaskId,
        title: str,
        description: Optional[str],
        status: TaskStatus,
        created_at: datetime,
        updated_at: datetime,
    ):
        self._id = id
        self._title = normalize_title(title)
        self._description = description
        self._status = status
        self._created_at = created_at
        self._updated_at = max(updated_at, created_at)
        self._deleted = False
        self._events = EventRecorder()

    @classmethod
    def create(cls, id: TaskId, title: str, description: Optional[str] = None) -> Task:
        now = _utcnow()
        task = cls(id, title, description, TaskStatus.TODO, now, now)
        task._events.record(
            TaskCreated(
                aggregate_id=str(id),
                title=task.title,
                description=task.description,
                status=task.status.value,
            )
        )
        return task

    @classmethod
    def reconstitute(
        cls,
        id: TaskId,
        title: str,
        description: Optional[str],
        status: TaskStatus,
        created_at: datetime,
        updated_at: datetime,
    ) -> Task:
        """Rebuild a stored task without recording any event."""
        return cls(id, title, description, status, created_at, updated_at)

    # --- read accessors ---

    @property
    def id(self) -> TaskId:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def status(self) -> TaskStatus:
        return self._status

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def deleted(self) -> bool:
        return self._deleted

    # --- behaviour ---

    def update(self, title: str, description: Optional[str] = None) -> None:
        new_title = normalize_title(title)
        self._title = new_title
        self._description = description
        self._touch()
        self._events.record(TaskUpdated(aggregate_id=str(self._id), title=new_title, description=description))

    def change_status(self, new_status: TaskStatus) -> None:
        if not self._status.can_transition_to(new_status):
            raise InvalidStatusTransitionError(self._status.value, new_status.value)
        old_status = self._status
        self._status = new_status
        self._touch()
        self._events.record(
            TaskStatusChanged(
                aggregate_id=str(self._id),
                old_status=old_status.value,
                new_status=new_status.value,
            )
        )

    def delete(self) -> None:
        if self._status is TaskStatus.DONE:
            raise TaskCannotBeDeletedError(self._status.value)
        self._deleted = True
        self._touch()
        self._events.record(TaskDeleted(aggregate_id=str(self._id), title=self._title, status=self._status.value))

    def _touch(self) -> None:
        # Clock can step backwards; updated_at must not.
        self._updated_at = max(_utcnow(), self._updated_at)

    # --- outbox (publisher only) ---

    def recorded_events(self) -> List[DomainEvent]:
        return self._events.recorded()

    def clear_recorded_events(self) -> None:
        self._events.clear()

    def __repr__(self) -> str:
        return f"Task(id={self._id.value!r}, title={self._title!r}, status={self._status.value!r})"
