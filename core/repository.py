"""Repository base class for the profile and settings stores.

Wraps the add/commit/refresh sequence so store adapters only express
their own queries.
"""

from sqlalchemy.orm import Session
from typing import TypeVar, Generic, Type, Optional, Any
from database.models import Base

T = TypeVar('T', bound=Base)


class BaseRepository(Generic[T]):
    """Generic repository bound to one model and one session.

    Attributes:
        model: SQLAlchemy model class to operate on.
        session: Database session for executing queries.
    """

    def __init__(self, model: Type[T], session: Session):
        self.model = model
        self.session = session

    def get_by_id(self, id: Any) -> Optional[T]:
        """Retrieve an object by its primary key, or None."""
        return self.session.get(self.model, id)

    def save(self, obj: T) -> T:
        """Add, commit and refresh an object.

        Works for new rows and for rows already attached to the session.
        """
        self.session.add(obj)
        self.session.commit()
        self.session.refresh(obj)
        return obj
