from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .enums import TaskStatus


@dataclass(frozen=True)
class TaskFilterCriteria:
    """Optional constraints for listing tasks.

    New fields go here; repositories apply whichever are set.
    """

    status: Optional[TaskStatus] = None

    @classmethod
    def from_query(cls, status: Optional[str] = None) -> TaskFilterCriteria:
        return cls(status=TaskStatus.from_string(status) if status is not None else None)

    def has_filters(self) -> bool:
        return self.status is not None
