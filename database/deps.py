"""FastAPI dependencies exposing read/write DB sessions.

Use `get_db_read` on lookup endpoints (goal, day target) so they can be
routed to a replica; everything that saves uses `get_db_write`.
"""

from .database import get_read_session, get_write_session


def get_db_write():
    """Yield a write-capable DB session for FastAPI dependency injection."""
    yield from get_write_session()


def get_db_read():
    """Yield a read-only DB session for FastAPI dependency injection."""
    yield from get_read_session()
