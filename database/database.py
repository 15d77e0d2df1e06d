"""Database helpers: engines, session factories and schema creation.

Reads and writes go through separate engines so a replica can serve the
read-only goal lookups. Both URLs default to the same SQLite file.
"""

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from .models import Base

WRITE_DATABASE_URL = os.getenv("WRITE_DATABASE_URL", "sqlite:///nutrition_goals.db")
READ_DATABASE_URL = os.getenv("READ_DATABASE_URL", WRITE_DATABASE_URL)


def _connect_args(url: str) -> dict:
    # sqlite connections are shared across FastAPI worker threads
    return {"check_same_thread": False} if url.startswith("sqlite") else {}


write_engine = create_engine(WRITE_DATABASE_URL, connect_args=_connect_args(WRITE_DATABASE_URL))
read_engine = create_engine(READ_DATABASE_URL, connect_args=_connect_args(READ_DATABASE_URL))

WriteSessionLocal = sessionmaker(bind=write_engine)
ReadSessionLocal = sessionmaker(bind=read_engine)


def init_db():
    """Create all tables that do not exist yet."""
    Base.metadata.create_all(bind=write_engine)


def get_write_session():
    """Yield a write-enabled SQLAlchemy session for the request scope."""
    db = WriteSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_read_session():
    """Yield a read-only SQLAlchemy session for the request scope."""
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
