from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..domain.task import Task


@dataclass(frozen=True)
class TaskSnapshot:
    """Current-state read view of a task."""

    id: str
    title: str
    description: Optional[str]
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_task(cls, task: Task) -> TaskSnapshot:
        return cls(
            id=task.id.value,
            title=task.title,
            description=task.description,
            status=task.status.value,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
