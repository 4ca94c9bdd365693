from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional, List, Dict, Any
from sqlalchemy.orm import Session
from ..db.session import get_db
from ..domain.filters import TaskFilterCriteria
from ..repositories.task_repository import TaskRepository, SqlAlchemyTaskRepository
from ..repositories.event_store import EventStore, SqlAlchemyEventStore, StoredEvent
from ..services.event_publisher import EventPublisher, StoreEventPublisher
from ..usecases.snapshot import TaskSnapshot
from ..usecases.create_task import CreateTaskUseCase
from ..usecases.update_task import UpdateTaskUseCase
from ..usecases.change_task_status import ChangeTaskStatusUseCase
from ..usecases.delete_task import DeleteTaskUseCase
from ..usecases.get_task import GetTaskByIdUseCase
from ..usecases.list_tasks import ListTasksUseCase
from ..usecases.task_history import GetTaskHistoryUseCase

router = APIRouter(prefix="/tasks", tags=["tasks"])


# --- Dependencies (overridable in tests) ---

def get_task_repository(db: Session = Depends(get_db)) -> TaskRepository:
    return SqlAlchemyTaskRepository(db)

def get_event_store(db: Session = Depends(get_db)) -> EventStore:
    return SqlAlchemyEventStore(db)

def get_event_publisher(store: EventStore = Depends(get_event_store)) -> EventPublisher:
    return StoreEventPublisher(store)


# --- Schemas ---

class TaskCreate(BaseModel):
    # Title rules live on the aggregate so the API reports them as INVALID_ARGUMENT
    title: str
    description: Optional[str] = None

class TaskUpdate(BaseModel):
    title: str
    description: Optional[str] = None

class TaskStatusChange(BaseModel):
    status: str = Field(..., description="todo, in_progress or done")

class TaskOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    status: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_snapshot(cls, snap: TaskSnapshot) -> "TaskOut":
        return cls(
            id=snap.id,
            title=snap.title,
            description=snap.description,
            status=snap.status,
            created_at=snap.created_at,
            updated_at=snap.updated_at,
        )

class StoredEventOut(BaseModel):
    aggregate_id: str = Field(..., alias="aggregateId")
    event_name: str = Field(..., alias="eventName")
    payload: Dict[str, Any]
    occurred_on: datetime = Field(..., alias="occurredOn")
    stored_on: datetime = Field(..., alias="storedOn")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_stored(cls, ev: StoredEvent) -> "StoredEventOut":
        return cls(
            aggregate_id=ev.aggregate_id,
            event_name=ev.event_name,
            payload=ev.payload,
            occurred_on=ev.occurred_on,
            stored_on=ev.stored_on,
        )


# --- Routes ---

@router.post("", response_model=TaskOut, status_code=201)
def create_task(
    body: TaskCreate,
    repo: TaskRepository = Depends(get_task_repository),
    publisher: EventPublisher = Depends(get_event_publisher),
):
    task_id = CreateTaskUseCase(repo, publisher).execute(body.title, body.description)
    return TaskOut.from_snapshot(GetTaskByIdUseCase(repo).execute(task_id))

@router.get("", response_model=List[TaskOut])
def list_tasks(status: Optional[str] = None, repo: TaskRepository = Depends(get_task_repository)):
    criteria = TaskFilterCriteria.from_query(status=status) if status is not None else None
    return [TaskOut.from_snapshot(s) for s in ListTasksUseCase(repo).execute(criteria)]

@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: str, repo: TaskRepository = Depends(get_task_repository)):
    return TaskOut.from_snapshot(GetTaskByIdUseCase(repo).execute(task_id))

@router.patch("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: str,
    body: TaskUpdate,
    repo: TaskRepository = Depends(get_task_repository),
    publisher: EventPublisher = Depends(get_event_publisher),
):
    snap = UpdateTaskUseCase(repo, publisher).execute(task_id, body.title, body.description)
    return TaskOut.from_snapshot(snap)

@router.patch("/{task_id}/status", response_model=TaskOut)
def change_task_status(
    task_id: str,
    body: TaskStatusChange,
    repo: TaskRepository = Depends(get_task_repository),
    publisher: EventPublisher = Depends(get_event_publisher),
):
    snap = ChangeTaskStatusUseCase(repo, publisher).execute(task_id, body.status)
    return TaskOut.from_snapshot(snap)

@router.delete("/{task_id}", status_code=204)
def delete_task(
    task_id: str,
    repo: TaskRepository = Depends(get_task_repository),
    publisher: EventPublisher = Depends(get_event_publisher),
):
    DeleteTaskUseCase(repo, publisher).execute(task_id)
    return Response(status_code=204)

@router.get("/{task_id}/events", response_model=List[StoredEventOut])
def get_task_events(task_id: str, store: EventStore = Depends(get_event_store)):
    return [StoredEventOut.from_stored(e) for e in GetTaskHistoryUseCase(store).execute(task_id)]
