import os, sys
import pytest
from fastapi.testclient import TestClient
import tempfile
import uuid

# Point the engine at a throwaway SQLite file before the app is imported
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+pysqlite:///{os.path.join(tempfile.gettempdir(), f'taskboard-test-{uuid.uuid4().hex}.db')}",
)

# Ensure taskboard import path (backend root first)
backend_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if backend_root not in sys.path:
    sys.path.insert(0, backend_root)

from taskboard.main import app  # noqa: E402
from taskboard.db.session import engine, Base, SessionLocal  # noqa: E402
from taskboard.db import models  # noqa: E402,F401
from taskboard.repositories.task_repository import InMemoryTaskRepository  # noqa: E402
from taskboard.repositories.event_store import InMemoryEventStore  # noqa: E402
from taskboard.services.event_publisher import StoreEventPublisher  # noqa: E402


@pytest.fixture(scope="function")
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture(scope="function")
def client(fresh_db):
    app.dependency_overrides.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db_session(fresh_db):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def task_repo():
    repo = InMemoryTaskRepository()
    yield repo
    repo.clear()


@pytest.fixture()
def event_store():
    store = InMemoryEventStore()
    yield store
    store.clear()


@pytest.fixture()
def publisher(event_store):
    return StoreEventPublisher(event_store)
