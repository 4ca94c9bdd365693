from __future__ import annotations
from dataclasses import dataclass
import re
import uuid

from ..errors import InvalidArgumentError

_CANONICAL_UUID = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE)


@dataclass(frozen=True)
class TaskId:
    """Opaque task identifier in canonical UUID form.

    Validated on construction; stored lowercase so ids compare by value.
    """

    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not _CANONICAL_UUID.fullmatch(self.value):
            raise InvalidArgumentError(f"Invalid task id: {self.value!r}")
        object.__setattr__(self, "value", self.value.lower())

    @classmethod
    def generate(cls) -> TaskId:
        return cls(str(uuid.uuid4()))

    @classmethod
    def from_string(cls, value: str) -> TaskId:
        return cls(value)

    def __str__(self) -> str:
        return self.value
