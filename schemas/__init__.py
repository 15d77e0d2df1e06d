"""Pydantic schema package for request, response and planning models."""

from .profile_schema import Profile, ProfileUpdateRequest, ProfileResponse
from .goal_schema import (
    GoalInput,
    MetabolicResult,
    PlanResult,
    PersistedNutritionGoal,
    GoalPlanRequest,
)

__all__ = [
    "Profile",
    "ProfileUpdateRequest",
    "ProfileResponse",
    "GoalInput",
    "MetabolicResult",
    "PlanResult",
    "PersistedNutritionGoal",
    "GoalPlanRequest",
]
