from __future__ import annotations
from typing import List

from ..domain.task_id import TaskId
from ..repositories.event_store import EventStore, StoredEvent


class GetTaskHistoryUseCase:
    """Stored events of one task, oldest first. Deleted tasks keep their history."""

    def __init__(self, event_store: EventStore):
        self.event_store = event_store

    def execute(self, task_id: str) -> List[StoredEvent]:
        return self.event_store.get_events_for_aggregate(TaskId.from_string(task_id).value)
