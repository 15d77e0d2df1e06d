"""Settings store adapter.

Holds the persisted nutrition goal as a JSON document on the user's
settings row. Every save replaces the whole goal (last write wins); a
soft delete is simply a save of `{"enabled": false}`.
"""

import json
from typing import Any, Dict, Optional

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DatabaseError
from core.logger import get_logger
from core.repository import BaseRepository
from database.models import UserSettings
from schemas.goal_schema import PersistedNutritionGoal

logger = get_logger("services.settings_store")

ALLOWED_SETTINGS = ("nutrition_goal",)


class SettingsStore(BaseRepository[UserSettings]):

    def __init__(self, session: Session):
        super().__init__(UserSettings, session)

    def get_settings(self, user_id: str) -> Dict[str, Any]:
        """Return `{"nutrition_goal": dict | None}` for the user."""
        row = self.get_by_id(user_id)
        if row is None or not row.nutrition_goal:
            return {"nutrition_goal": None}
        try:
            goal = json.loads(row.nutrition_goal)
        except json.JSONDecodeError:
            logger.warning("Stored nutrition goal for user %s is not valid JSON", user_id)
            goal = None
        return {"nutrition_goal": goal if isinstance(goal, dict) else None}

    def update_settings(self, user_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Replace the settings sections present in `updates`.

        Unknown sections are dropped.

        Raises:
            DatabaseError: If the write fails.
        """
        row = self.get_by_id(user_id) or UserSettings(user_id=user_id)
        applied = [key for key in ALLOWED_SETTINGS if key in updates]
        if "nutrition_goal" in applied:
            row.nutrition_goal = json.dumps(updates["nutrition_goal"])
        try:
            self.save(row)
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Settings update failed for user %s", user_id)
            raise DatabaseError("Failed to update settings", operation="update_settings") from exc
        logger.info("Settings updated for user %s: %s", user_id, applied)
        return self.get_settings(user_id)

    def load_goal(self, user_id: str) -> Optional[PersistedNutritionGoal]:
        """Parse the stored goal, or None if there is none or it is unreadable."""
        raw = self.get_settings(user_id)["nutrition_goal"]
        if raw is None:
            return None
        try:
            return PersistedNutritionGoal.model_validate(raw)
        except SchemaValidationError as exc:
            logger.warning("Ignoring unreadable nutrition goal for user %s: %s", user_id, exc)
            return None

    def save_goal(self, user_id: str, record: PersistedNutritionGoal) -> PersistedNutritionGoal:
        payload = record.model_dump(mode="json", exclude_none=True)
        self.update_settings(user_id, {"nutrition_goal": payload})
        return record
