from sqlalchemy import Column, String, Text, DateTime, Integer, JSON, Index
from datetime import datetime, timezone
from .session import Base


def utcnow():
    return datetime.now(timezone.utc)

class TaskRecord(Base):
    """Current-state row of a task aggregate (outbox is never stored)."""
    __tablename__ = "tasks"
    id = Column(String(36), primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="todo", index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

class StoredEventRecord(Base):
    """Append-only event log row. `sequence` is the append order."""
    __tablename__ = "stored_events"
    sequence = Column(Integer, primary_key=True, autoincrement=True)
    aggregate_id = Column(String(36), nullable=False)
    event_name = Column(String(255), nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    occurred_on = Column(DateTime(timezone=True), nullable=False)
    stored_on = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_aggregate_id", "aggregate_id"),
        Index("idx_event_name", "event_name"),
    )
