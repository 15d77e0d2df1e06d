"""Nutrition goal API router.

Endpoints to preview a calorie plan, start tracking it, read it back,
remove it, and resolve or override a single day's calorie target.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from database.deps import get_db_read, get_db_write
from core.logger import get_logger
from schemas.goal_schema import (
    DayOverrideRequest,
    DayTargetResponse,
    GoalPlanRequest,
    PersistedNutritionGoal,
    PlanResult,
    SavedGoalResponse,
)
from services.goal_planner import goal_planner
from services.profile_store import ProfileStore
from services.settings_store import SettingsStore

logger = get_logger("api.goals")
router = APIRouter(prefix="/api/goals", tags=["goals"])


@router.post("/{user_id}/nutrition/preview", response_model=PlanResult)
def preview_nutrition_goal(user_id: str, payload: GoalPlanRequest, db: Session = Depends(get_db_read)):
    """Compute a calorie plan without saving it.

    Profile values in the payload override the stored profile for this
    computation only.

    Raises:
        InsufficientDataError: If age, weight, height or gender is missing.
    """
    logger.info("Previewing %s plan for user %s", payload.plan_type, user_id)
    return goal_planner.preview(ProfileStore(db), user_id, payload)


@router.post("/{user_id}/nutrition", response_model=SavedGoalResponse, status_code=201)
def start_nutrition_goal(user_id: str, payload: GoalPlanRequest, db: Session = Depends(get_db_write)):
    """Compute a plan, save it as the active goal and start tracking today.

    Profile fields sent in the payload are written back only where the
    stored profile is empty.

    Raises:
        InsufficientDataError: If age, weight, height or gender is missing.
        DatabaseError: If the goal cannot be saved.
    """
    plan, record = goal_planner.start_tracking(ProfileStore(db), SettingsStore(db), user_id, payload)
    return SavedGoalResponse(plan=plan, record=record)


@router.get("/{user_id}/nutrition", response_model=PlanResult)
def get_nutrition_goal(user_id: str, db: Session = Depends(get_db_read)):
    """Return the active goal as a plan.

    Raises:
        NotFoundError: If there is no enabled goal.
    """
    return goal_planner.current_plan(ProfileStore(db), SettingsStore(db), user_id)


@router.delete("/{user_id}/nutrition", status_code=204)
def remove_nutrition_goal(user_id: str, db: Session = Depends(get_db_write)):
    """Disable the active goal; the settings record itself is kept."""
    goal_planner.disable_goal(SettingsStore(db), user_id)
    return Response(status_code=204)


@router.get("/{user_id}/nutrition/day", response_model=DayTargetResponse)
def get_day_target(
    user_id: str,
    target_date: date = Query(..., alias="date", description="Calendar date, YYYY-MM-DD"),
    consumed: Optional[float] = Query(None, ge=0, description="Calories eaten so far that day"),
    db: Session = Depends(get_db_read),
):
    """Return the calorie target for a date and whether it has been reached.

    Raises:
        NotFoundError: If there is no enabled goal.
    """
    return goal_planner.day_target(SettingsStore(db), user_id, target_date, consumed)


@router.put("/{user_id}/nutrition/day", response_model=PersistedNutritionGoal)
def override_day_target(user_id: str, payload: DayOverrideRequest, db: Session = Depends(get_db_write)):
    """Replace the target for the weekday of `target_date`.

    Values under the goal's safety floor are raised to the floor.

    Raises:
        NotFoundError: If there is no enabled goal.
    """
    return goal_planner.override_day(SettingsStore(db), user_id, payload.target_date, payload.calories)
