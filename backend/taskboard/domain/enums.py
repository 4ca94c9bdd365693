"""Domain enumerations for strong typing & validation."""
from enum import Enum

from ..errors import InvalidArgumentError


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @classmethod
    def from_string(cls, raw: str) -> "TaskStatus":
        try:
            return cls(raw)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise InvalidArgumentError(f"Invalid task status: {raw}. Valid statuses are: {valid}") from None

    def can_transition_to(self, target: "TaskStatus") -> bool:
        # Only todo -> done is refused; reopening and self transitions are allowed.
        if target is TaskStatus.DONE:
            return self in (TaskStatus.IN_PROGRESS, TaskStatus.DONE)
        return True
