"""Weekly calorie schedules.

Spreads a daily target over Monday..Sunday:

- standard: the same target every day.
- weekender: Friday and Saturday get up to +15% each, paid for by the other
  five days. The reduction is limited by the capped floor, so the increase
  shrinks instead of pushing weekdays under it; the weekly average may then
  end up a little above the target.
- auto: same as standard when the plan is created.
"""

from typing import List

from core.exceptions import ValidationError
from core.logger import get_logger
from core.rounding import round_half_up
from schemas.goal_schema import DAY_NAMES, PLAN_TYPES, DayCalories
from services.safety import safety_enforcer

logger = get_logger("services.schedule_allocator")

WEEKENDER_INCREASE = 0.15
WEEKENDER_DAYS = (4, 5)  # Fri, Sat


class ScheduleAllocator:
    """Builds the 7-day schedule for each plan type."""

    def __init__(self, safety=safety_enforcer):
        self.safety = safety

    def allocate(self, plan_type: str, daily_calories: float, bmr: int) -> List[DayCalories]:
        """Return seven `DayCalories`, Monday first, rounded half up."""
        if plan_type not in PLAN_TYPES:
            raise ValidationError(f"Unknown plan type '{plan_type}'", field="plan_type")

        if plan_type == 'weekender':
            calories = self._weekender(daily_calories, bmr)
        else:
            calories = [round_half_up(daily_calories)] * 7

        logger.debug("%s schedule for %s kcal: %s", plan_type, daily_calories, calories)
        return [DayCalories(day=day, calories=cals) for day, cals in zip(DAY_NAMES, calories)]

    def _weekender(self, base_target: float, bmr: int) -> List[int]:
        floor, ceiling = self.safety.capped_range(base_target, bmr)

        desired_increase_total = 2 * base_target * WEEKENDER_INCREASE
        weekday_count = 7 - len(WEEKENDER_DAYS)
        max_reduction_total = weekday_count * max(base_target - floor, 0)
        actual_increase_total = min(desired_increase_total, max_reduction_total)
        increase_each = actual_increase_total / len(WEEKENDER_DAYS)
        reduction_each = actual_increase_total / weekday_count

        calories = []
        for idx in range(7):
            if idx in WEEKENDER_DAYS:
                cals = base_target + increase_each
            else:
                cals = base_target - reduction_each
            calories.append(round_half_up(min(ceiling, max(floor, cals))))
        return calories


schedule_allocator = ScheduleAllocator()
__all__ = ["ScheduleAllocator", "schedule_allocator", "WEEKENDER_INCREASE"]
