from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol, List, Dict, Any, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import models
from ..domain.events import DomainEvent
from ..errors import PersistenceError

logger = logging.getLogger(__name__)


def _to_utc(value: datetime) -> datetime:
    # SQLite keeps the wall time and drops the offset, so store UTC only
    return value.astimezone(timezone.utc) if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class StoredEvent:
    aggregate_id: str
    event_name: str
    payload: Dict[str, Any]
    occurred_on: datetime
    stored_on: datetime
    sequence: Optional[int] = field(default=None, compare=False)


class EventStore(Protocol):
    def append(self, event: DomainEvent) -> None: ...
    def get_events_for_aggregate(self, aggregate_id: str) -> List[StoredEvent]: ...
    def get_all_events(self) -> List[StoredEvent]: ...


class InMemoryEventStore:
    """List-backed store for tests and local runs. One instance per run; `clear()` resets it."""

    def __init__(self):
        self._events: List[StoredEvent] = []

    def append(self, event: DomainEvent) -> None:
        self._events.append(
            StoredEvent(
                aggregate_id=event.aggregate_id,
                event_name=event.event_name,
                payload=event.payload(),
                occurred_on=_to_utc(event.occurred_on),
                stored_on=datetime.now(timezone.utc),
                sequence=len(self._events) + 1,
            )
        )

    def get_events_for_aggregate(self, aggregate_id: str) -> List[StoredEvent]:
        return self._ordered([e for e in self._events if e.aggregate_id == aggregate_id])

    def get_all_events(self) -> List[StoredEvent]:
        return self._ordered(self._events)

    def clear(self) -> None:
        self._events = []

    def count(self) -> int:
        return len(self._events)

    @staticmethod
    def _ordered(events: List[StoredEvent]) -> List[StoredEvent]:
        # sorted() is stable, so equal timestamps keep append order
        return sorted(events, key=lambda e: e.occurred_on)


class SqlAlchemyEventStore:
    """Durable store backed by the `stored_events` table."""

    def __init__(self, db: Session):
        self.db = db

    def append(self, event: DomainEvent) -> None:
        record = models.StoredEventRecord(
            aggregate_id=event.aggregate_id,
            event_name=event.event_name,
            payload=event.payload(),
            occurred_on=_to_utc(event.occurred_on),
            stored_on=datetime.now(timezone.utc),
        )
        try:
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("append failed aggregate=%s event=%s", event.aggregate_id, event.event_name)
            raise PersistenceError(f"Could not append {event.event_name} for {event.aggregate_id}") from exc
        logger.debug("appended %s aggregate=%s sequence=%s", event.event_name, event.aggregate_id, record.sequence)

    def get_events_for_aggregate(self, aggregate_id: str) -> List[StoredEvent]:
        q = self.db.query(models.StoredEventRecord)
        q = q.filter(models.StoredEventRecord.aggregate_id == aggregate_id)
        return self._fetch(q)

    def get_all_events(self) -> List[StoredEvent]:
        return self._fetch(self.db.query(models.StoredEventRecord))

    def _fetch(self, q) -> List[StoredEvent]:
        q = q.order_by(models.StoredEventRecord.occurred_on.asc(), models.StoredEventRecord.sequence.asc())
        try:
            rows = q.all()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("event query failed")
            raise PersistenceError("Could not read stored events") from exc
        return [self._to_stored_event(r) for r in rows]

    @staticmethod
    def _to_stored_event(row: models.StoredEventRecord) -> StoredEvent:
        return StoredEvent(
            aggregate_id=row.aggregate_id,
            event_name=row.event_name,
            payload=dict(row.payload or {}),
            occurred_on=_as_utc(row.occurred_on),
            stored_on=_as_utc(row.stored_on),
            sequence=row.sequence,
        )
