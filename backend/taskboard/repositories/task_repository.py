from __future__ import annotations
from datetime import datetime, timezone
from typing import Protocol, List, Optional, Dict
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import models
from ..domain.enums import TaskStatus
from ..domain.filters import TaskFilterCriteria
from ..domain.task import Task
from ..domain.task_id import TaskId
from ..errors import PersistenceError

logger = logging.getLogger(__name__)


class TaskRepository(Protocol):
    def save(self, task: Task) -> None: ...
    def find_by_id(self, task_id: TaskId) -> Optional[Task]: ...
    def find_all(self, criteria: Optional[TaskFilterCriteria] = None) -> List[Task]: ...
    def delete(self, task: Task) -> None: ...


class InMemoryTaskRepository:
    """Dict-backed repository for tests and fast iteration.

    Create one per test/run and pass it to the use cases; `clear()` resets it.
    Listing order is insertion order.
    """

    def __init__(self):
        self._tasks: Dict[str, Task] = {}

    def save(self, task: Task) -> None:
        self._tasks[task.id.value] = task

    def find_by_id(self, task_id: TaskId) -> Optional[Task]:
        return self._tasks.get(task_id.value)

    def find_all(self, criteria: Optional[TaskFilterCriteria] = None) -> List[Task]:
        tasks = list(self._tasks.values())
        if criteria is None or not criteria.has_filters():
            return tasks
        return [t for t in tasks if _matches(t, criteria)]

    def delete(self, task: Task) -> None:
        self._tasks.pop(task.id.value, None)

    def clear(self) -> None:
        self._tasks = {}

    def count(self) -> int:
        return len(self._tasks)


def _matches(task: Task, criteria: TaskFilterCriteria) -> bool:
    if criteria.status is not None and task.status is not criteria.status:
        return False
    return True


class SqlAlchemyTaskRepository:
    """SQLAlchemy-backed implementation over the `tasks` table.

    Each call commits; a storage fault rolls the session back and is raised as
    PersistenceError. Loaded tasks come back with an empty outbox.
    """

    def __init__(self, db: Session):
        self.db = db

    def save(self, task: Task) -> None:
        try:
            existing = self.db.get(models.TaskRecord, task.id.value)
            if existing:
                existing.title = task.title
                existing.description = task.description
                existing.status = task.status.value
                existing.updated_at = _to_utc(task.updated_at)
            else:
                self.db.add(
                    models.TaskRecord(
                        id=task.id.value,
                        title=task.title,
                        description=task.description,
                        status=task.status.value,
                        created_at=_to_utc(task.created_at),
                        updated_at=_to_utc(task.updated_at),
                    )
                )
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("save failed task=%s", task.id)
            raise PersistenceError(f"Could not save task {task.id}") from exc
        logger.debug("saved task=%s status=%s", task.id, task.status.value)

    def find_by_id(self, task_id: TaskId) -> Optional[Task]:
        try:
            row = self.db.get(models.TaskRecord, task_id.value)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("lookup failed task=%s", task_id)
            raise PersistenceError(f"Could not load task {task_id}") from exc
        return self._to_task(row) if row else None

    def find_all(self, criteria: Optional[TaskFilterCriteria] = None) -> List[Task]:
        q = self.db.query(models.TaskRecord)
        if criteria is not None and criteria.status is not None:
            q = q.filter(models.TaskRecord.status == criteria.status.value)
        q = q.order_by(models.TaskRecord.created_at.asc(), models.TaskRecord.id.asc())
        try:
            rows = q.all()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("task query failed")
            raise PersistenceError("Could not list tasks") from exc
        return [self._to_task(r) for r in rows]

    def delete(self, task: Task) -> None:
        try:
            existing = self.db.get(models.TaskRecord, task.id.value)
            if existing is None:
                return
            self.db.delete(existing)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("delete failed task=%s", task.id)
            raise PersistenceError(f"Could not delete task {task.id}") from exc
        logger.debug("deleted task=%s", task.id)

    @staticmethod
    def _to_task(row: models.TaskRecord) -> Task:
        return Task.reconstitute(
            id=TaskId(row.id),
            title=row.title,
            description=row.description,
            status=TaskStatus(row.status),
            created_at=_as_utc(row.created_at),
            updated_at=_as_utc(row.updated_at),
        )


def _to_utc(value: datetime) -> datetime:
    # SQLite keeps the wall time and drops the offset, so store UTC only
    return value.astimezone(timezone.utc) if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
