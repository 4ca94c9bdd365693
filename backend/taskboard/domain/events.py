"""Task domain events and the in-memory outbox that stages them.

Events are immutable facts about a single task aggregate. Each kind sets its
own ``event_name`` discriminator; it is part of the record, not derived from
the class.

The outbox (``EventRecorder``) lives on the aggregate until a publisher
drains it into the event store. It is never persisted with the task itself.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, kw_only=True)
class DomainEvent(ABC):
    aggregate_id: str
    event_name: str = field(default="", init=False)
    occurred_on: datetime = field(default_factory=_utcnow)

    @abstractmethod
    def payload(self) -> Dict[str, Any]:
        """Kind-specific body stored alongside the envelope."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "aggregate_id": self.aggregate_id,
            "event_name": self.event_name,
            "occurred_on": self.occurred_on.isoformat(),
            "payload": self.payload(),
        }


@dataclass(frozen=True, kw_only=True)
class TaskCreated(DomainEvent):
    title: str
    description: Optional[str]
    status: str
    event_name: str = field(default="TaskCreated", init=False)

    def payload(self) -> Dict[str, Any]:
        return {"title": self.title, "description": self.description, "status": self.status}


@dataclass(frozen=True, kw_only=True)
class TaskUpdated(DomainEvent):
    title: str
    description: Optional[str]
    event_name: str = field(default="TaskUpdated", init=False)

    def payload(self) -> Dict[str, Any]:
        return {"title": self.title, "description": self.description}


@dataclass(frozen=True, kw_only=True)
class TaskStatusChanged(DomainEvent):
    old_status: str
    new_status: str
    event_name: str = field(default="TaskStatusChanged", init=False)

    def payload(self) -> Dict[str, Any]:
        return {"old_status": self.old_status, "new_status": self.new_status}


@dataclass(frozen=True, kw_only=True)
class TaskDeleted(DomainEvent):
    title: str
    status: str
    event_name: str = field(default="TaskDeleted", init=False)

    def payload(self) -> Dict[str, Any]:
        return {"title": self.title, "status": self.status}


class EventRecorder:
    """Ordered, transient buffer of not-yet-published events."""

    def __init__(self):
        self._events: List[DomainEvent] = []

    def record(self, event: DomainEvent) -> None:
        self._events.append(event)

    def recorded(self) -> List[DomainEvent]:
        return list(self._events)

    def clear(self) -> None:
        self._events = []

    def __len__(self) -> int:
        return len(self._events)


class RecordsEvents(Protocol):
    """Anything exposing an outbox the publisher can drain."""

    def recorded_events(self) -> List[DomainEvent]: ...

    def clear_recorded_events(self) -> None: ...
