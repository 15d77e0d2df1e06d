"""Turns a weekly weight-change rate into a daily calorie target.

One pound is taken as 3500 kcal, so each lb/week of change is a 500 kcal
daily deficit. The safety floor overrides any deficit that would go below
it; `floor_applied` tells the caller the requested rate was not honored.
"""

import math
from typing import Any, Dict

from core.exceptions import InsufficientDataError
from core.logger import get_logger
from core.rounding import round_half_up
from schemas.goal_schema import GoalInput, MetabolicResult
from services.safety import safety_enforcer

logger = get_logger("services.goal_deficit")

KCAL_PER_LB_PER_WEEK = 500


class GoalDeficitCalculator:

    def __init__(self, safety=safety_enforcer):
        self.safety = safety

    def calculate(self, current_weight: float, goal: GoalInput, metabolic: MetabolicResult) -> Dict[str, Any]:
        """Compute deficit, daily target and timeline for a goal.

        Args:
            current_weight: Current body weight in pounds.
            goal: Target weight, rate and plan type.
            metabolic: BMR/TDEE for the same profile snapshot.

        Returns:
            Dict with weight_to_lose_abs, weekly_deficit (a daily figure),
            daily_calories, min_safe_calories, timeline_weeks and
            floor_applied.

        Raises:
            InsufficientDataError: If the BMR is 0.
        """
        if metabolic.bmr <= 0:
            raise InsufficientDataError("Cannot plan calories without a valid BMR")

        rate = goal.weight_change_rate_lbs_per_week
        weight_to_lose = abs(current_weight - goal.target_weight_lbs)
        weekly_deficit = round_half_up(rate * KCAL_PER_LB_PER_WEEK)
        min_safe = self.safety.min_safe_calories(metabolic.bmr)
        requested = metabolic.tdee - weekly_deficit
        daily_calories = max(requested, min_safe)
        timeline_weeks = math.ceil(weight_to_lose / rate)

        floor_applied = requested < min_safe
        if floor_applied:
            logger.info(
                "Safety floor applied: requested %s kcal/day, using %s", requested, min_safe
            )
        logger.debug(
            "Deficit %s kcal/day, target %s kcal/day, %s weeks",
            weekly_deficit, daily_calories, timeline_weeks
        )
        return {
            "weight_to_lose_abs": weight_to_lose,
            "weekly_deficit": weekly_deficit,
            "daily_calories": daily_calories,
            "min_safe_calories": min_safe,
            "timeline_weeks": timeline_weeks,
            "floor_applied": floor_applied,
        }


goal_deficit_calculator = GoalDeficitCalculator()
__all__ = ["GoalDeficitCalculator", "goal_deficit_calculator", "KCAL_PER_LB_PER_WEEK"]
