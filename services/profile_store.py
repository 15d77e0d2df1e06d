"""Profile store adapter.

Serves `{age, height, gender}` plus the latest weigh-in to the planner and
applies partial profile updates.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DatabaseError
from core.logger import get_logger
from core.repository import BaseRepository
from database.models import UserProfile, WeightLog

logger = get_logger("services.profile_store")

UPDATABLE_FIELDS = ("age", "height", "gender")


class ProfileStore(BaseRepository[UserProfile]):

    def __init__(self, session: Session):
        super().__init__(UserProfile, session)

    def get_profile(self, user_id: str) -> Dict[str, Any]:
        """Stored profile fields; all None when the user has no profile."""
        row = self.get_by_id(user_id)
        if row is None:
            return {"age": None, "height": None, "gender": None}
        return {"age": row.age, "height": row.height, "gender": row.gender}

    def get_latest_weight(self, user_id: str) -> Optional[float]:
        latest = (
            self.session.query(WeightLog)
            .filter(WeightLog.user_id == user_id)
            .order_by(WeightLog.log_date.desc(), WeightLog.id.desc())
            .first()
        )
        return latest.weight_lbs if latest else None

    def update_profile(self, user_id: str, partial: Dict[str, Any]) -> UserProfile:
        """Set the given profile fields, creating the profile if needed.

        Keys outside age/height/gender are ignored.

        Raises:
            DatabaseError: If the write fails.
        """
        row = self.get_by_id(user_id) or UserProfile(user_id=user_id)
        changed = []
        for key in UPDATABLE_FIELDS:
            if key in partial:
                setattr(row, key, partial[key])
                changed.append(key)
        try:
            row = self.save(row)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Profile update failed for user %s", user_id)
            raise DatabaseError("Failed to update profile", operation="update_profile") from exc
        logger.info("Profile updated for user %s: %s", user_id, changed)
        return row

    def log_weight(self, user_id: str, weight_lbs: float, log_date: Optional[datetime] = None) -> WeightLog:
        """Record a weigh-in.

        Raises:
            DatabaseError: If the write fails.
        """
        entry = WeightLog(user_id=user_id, weight_lbs=weight_lbs, log_date=log_date or datetime.utcnow())
        try:
            self.session.add(entry)
            self.session.commit()
            self.session.refresh(entry)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Weight log failed for user %s", user_id)
            raise DatabaseError("Failed to record weight", operation="log_weight") from exc
        return entry
