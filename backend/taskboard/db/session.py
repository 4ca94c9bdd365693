from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
import os
import threading

"""Database session / engine configuration.

NOTE: In-memory SQLite (":memory:") creates a new database per connection which
breaks tests that open multiple connections. We use a file-based SQLite
database unless DATABASE_URL is provided. This can be replaced by a
PostgreSQL URL in real deployments.
"""

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+pysqlite:///./taskboard.db")

engine = create_engine(
    DATABASE_URL,
    echo=False,
    future=True,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

class Base(DeclarativeBase):
    pass

_init_lock = threading.Lock()
_tables_created = False

def ensure_tables():
    global _tables_created
    if _tables_created:
        return
    with _init_lock:
        if not _tables_created:
            from . import models  # noqa: F401 register tables on Base.metadata
            Base.metadata.create_all(bind=engine)
            _tables_created = True

# Dependency
def get_db():
    ensure_tables()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
