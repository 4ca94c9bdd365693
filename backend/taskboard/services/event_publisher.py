"""Drains an aggregate's outbox into the event store.

Events are appended one at a time in recorded order. If an append fails the
error propagates and the outbox is left as-is, so a retry re-sends the whole
batch (at-least-once into the store). The outbox is cleared only after every
append succeeded.
"""
from __future__ import annotations
from typing import Protocol
import logging

from prometheus_client import Counter

from ..domain.events import RecordsEvents
from ..repositories.event_store import EventStore

logger = logging.getLogger(__name__)

EVENTS_PUBLISHED = Counter(
    "taskboard_domain_events_published_total", "Domain events appended to the event store", ["event_name"]
)


class EventPublisher(Protocol):
    def publish_events_from(self, aggregate: RecordsEvents) -> None: ...


class StoreEventPublisher:
    def __init__(self, event_store: EventStore):
        self.event_store = event_store

    def publish_events_from(self, aggregate: RecordsEvents) -> None:
        events = aggregate.recorded_events()
        for event in events:
            self.event_store.append(event)
            EVENTS_PUBLISHED.labels(event_name=event.event_name).inc()
        aggregate.clear_recorded_events()
        if events:
            logger.debug("published %d event(s) for aggregate=%s", len(events), events[0].aggregate_id)
