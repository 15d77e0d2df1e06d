"""Conversion between computed plans and the persisted goal record.

The record keeps the schedule as a bare list of seven numbers, Monday
first. Day labels are positional and rebuilt from `DAY_NAMES` on read.
Reads never fail on a missing or malformed schedule: day lookups fall back
to `daily_calorie_target` and re-hydrated plans get a zeroed week.
"""

from datetime import date, datetime, timedelta
from typing import List, Optional

from core.logger import get_logger
from core.rounding import round_half_up
from schemas.goal_schema import (
    DAY_NAMES,
    PLAN_TYPES,
    DayCalories,
    PersistedNutritionGoal,
    PlanResult,
    PlanRules,
)
from services.goal_deficit import KCAL_PER_LB_PER_WEEK
from services.safety import CAP_PERCENT, MIN_SAFE_FLOOR

logger = get_logger("services.goal_mapper")


def monday_first_day_index(day: date) -> int:
    """Schedule slot for a date: Monday=0 .. Sunday=6.

    Equivalent to `(sunday_first_weekday + 6) % 7`; Python's `weekday()`
    already counts from Monday.
    """
    return day.weekday()


def calorie_goal_met(consumed: Optional[float], target: Optional[float]) -> bool:
    """A day's calorie goal counts as met once intake reaches the target."""
    if not target or target <= 0 or consumed is None:
        return False
    return consumed >= target


class GoalPersistenceMapper:

    def to_record(self, plan: PlanResult, start_date: datetime) -> PersistedNutritionGoal:
        """Flatten a plan into the record saved under `nutrition_goal`."""
        return PersistedNutritionGoal(
            enabled=True,
            start_date=start_date,
            start_weight=plan.current_weight,
            target_weight=plan.target_weight,
            activity_level=plan.activity_level,
            weight_change_rate=plan.weight_change_rate,
            plan_type=plan.plan_type,
            daily_calorie_target=plan.daily_calories,
            weekly_schedule=[day.calories for day in plan.schedule],
            min_safe_calories=plan.rules.min_safe_calories,
            bmr=plan.bmr,
            tdee=plan.tdee,
            timeline_weeks=plan.timeline_weeks,
            estimated_end_date=start_date + timedelta(days=plan.timeline_weeks * 7),
        )

    def resolve_day_target(self, record: PersistedNutritionGoal, day: date) -> int:
        """Calorie target for a calendar date."""
        if record.weekly_schedule is None:
            return round_half_up(record.daily_calorie_target or 0)
        return round_half_up(record.weekly_schedule[monday_first_day_index(day)])

    def from_record(
        self,
        record: PersistedNutritionGoal,
        fallback_weight: Optional[float] = None,
        fallback_activity_level: Optional[str] = None,
    ) -> PlanResult:
        """Rebuild a displayable plan from a stored record.

        Args:
            record: The persisted goal.
            fallback_weight: Current weight to use when the record has no
                start weight.
            fallback_activity_level: Activity level to use when the record
                has none.
        """
        if record.weekly_schedule is None:
            schedule = [DayCalories(day=day, calories=0) for day in DAY_NAMES]
        else:
            schedule = [
                DayCalories(day=day, calories=round_half_up(cals))
                for day, cals in zip(DAY_NAMES, record.weekly_schedule)
            ]

        if record.start_weight and record.target_weight:
            weight_to_lose = abs(record.start_weight - record.target_weight)
        else:
            weight_to_lose = 0
        plan_type = record.plan_type if record.plan_type in PLAN_TYPES else 'standard'
        rate = record.weight_change_rate or 0

        return PlanResult(
            current_weight=record.start_weight or fallback_weight or 0,
            target_weight=record.target_weight or 0,
            weight_to_lose_abs=weight_to_lose,
            bmr=round_half_up(record.bmr or 0),
            tdee=round_half_up(record.tdee or 0),
            daily_calories=round_half_up(record.daily_calorie_target or 0),
            weekly_deficit=round_half_up(rate * KCAL_PER_LB_PER_WEEK),
            timeline_weeks=record.timeline_weeks or 0,
            activity_level=record.activity_level or fallback_activity_level,
            weight_change_rate=rate,
            plan_type=plan_type,
            schedule=schedule,
            rules=PlanRules(
                min_safe_calories=round_half_up(record.min_safe_calories or MIN_SAFE_FLOOR),
                cap_percent=CAP_PERCENT,
                auto_adjust=record.plan_type == 'auto',
            ),
        )

    def override_day_target(self, record: PersistedNutritionGoal, day: date, calories: float) -> PersistedNutritionGoal:
        """Return a copy of `record` with one weekday's target replaced.

        The new value is held at or above the record's safety floor. A
        missing schedule is first expanded to seven copies of the daily
        target.
        """
        if record.weekly_schedule is None:
            base: List[float] = [record.daily_calorie_target or 0] * 7
        else:
            base = list(record.weekly_schedule)

        floor = record.min_safe_calories or MIN_SAFE_FLOOR
        idx = monday_first_day_index(day)
        base[idx] = max(floor, round_half_up(calories))
        logger.info("Day target for %s (%s) set to %s", day.isoformat(), DAY_NAMES[idx], base[idx])
        return PersistedNutritionGoal.model_validate(
            {**record.model_dump(), "enabled": True, "weekly_schedule": base}
        )

    def disabled_record(self) -> PersistedNutritionGoal:
        """Record written to soft-delete the active goal."""
        return PersistedNutritionGoal(enabled=False)


goal_mapper = GoalPersistenceMapper()
__all__ = [
    "GoalPersistenceMapper",
    "goal_mapper",
    "monday_first_day_index",
    "calorie_goal_met",
]
