"""Nutrition goal planning workflow.

Runs ProfileResolver -> MetabolicCalculator -> GoalDeficitCalculator ->
ScheduleAllocator to build a plan, and GoalPersistenceMapper to save it and
to answer per-day targets. Stores are passed in per call; the planner holds
no per-user state.
"""

from datetime import date, datetime
from typing import Optional, Tuple

from core.exceptions import InsufficientDataError, NotFoundError
from core.logger import get_logger
from schemas.goal_schema import (
    DAY_NAMES,
    DayTargetResponse,
    GoalInput,
    GoalPlanRequest,
    PersistedNutritionGoal,
    PlanResult,
    PlanRules,
)
from schemas.profile_schema import Profile
from services.goal_deficit import goal_deficit_calculator
from services.goal_mapper import calorie_goal_met, goal_mapper, monday_first_day_index
from services.metabolic_calculator import metabolic_calculator
from services.profile_resolver import profile_resolver
from services.profile_store import ProfileStore
from services.safety import safety_enforcer
from services.schedule_allocator import schedule_allocator
from services.settings_store import SettingsStore

logger = get_logger("services.goal_planner")


class GoalPlanner:
    """Class-based planner used by the goals API."""

    def __init__(
        self,
        resolver=profile_resolver,
        calculator=metabolic_calculator,
        deficit=goal_deficit_calculator,
        allocator=schedule_allocator,
        mapper=goal_mapper,
        safety=safety_enforcer,
    ):
        self.resolver = resolver
        self.calculator = calculator
        self.deficit = deficit
        self.allocator = allocator
        self.mapper = mapper
        self.safety = safety

    def build_plan(self, profile: Profile, goal: GoalInput) -> PlanResult:
        """Compute a complete plan from a profile snapshot and a goal.

        Raises:
            InsufficientDataError: If the profile does not yield a BMR.
        """
        metabolic = self.calculator.compute(profile)
        if metabolic.bmr == 0:
            missing = self.resolver.missing_fields(profile)
            raise InsufficientDataError(
                "Profile is incomplete; age, weight, height and gender are required",
                missing_fields=missing,
            )

        numbers = self.deficit.calculate(profile.weight_lbs, goal, metabolic)
        schedule = self.allocator.allocate(goal.plan_type, numbers["daily_calories"], metabolic.bmr)
        return PlanResult(
            current_weight=profile.weight_lbs,
            target_weight=goal.target_weight_lbs,
            weight_to_lose_abs=numbers["weight_to_lose_abs"],
            bmr=metabolic.bmr,
            tdee=metabolic.tdee,
            daily_calories=numbers["daily_calories"],
            weekly_deficit=numbers["weekly_deficit"],
            timeline_weeks=numbers["timeline_weeks"],
            activity_level=profile.activity_level,
            weight_change_rate=goal.weight_change_rate_lbs_per_week,
            plan_type=goal.plan_type,
            schedule=schedule,
            rules=PlanRules(
                min_safe_calories=numbers["min_safe_calories"],
                cap_percent=self.safety.cap_percent,
                auto_adjust=goal.plan_type == 'auto',
            ),
            floor_applied=numbers["floor_applied"],
        )

    def resolve_profile(self, profiles: ProfileStore, user_id: str, request: GoalPlanRequest) -> Profile:
        stored = profiles.get_profile(user_id)
        return self.resolver.resolve(
            stored,
            latest_weight=profiles.get_latest_weight(user_id),
            activity_level=request.activity_level,
            overrides=self._entered_profile(request),
        )

    def preview(self, profiles: ProfileStore, user_id: str, request: GoalPlanRequest) -> PlanResult:
        profile = self.resolve_profile(profiles, user_id, request)
        return self.build_plan(profile, self._goal_input(request))

    def start_tracking(
        self,
        profiles: ProfileStore,
        settings: SettingsStore,
        user_id: str,
        request: GoalPlanRequest,
        start_date: Optional[datetime] = None,
    ) -> Tuple[PlanResult, PersistedNutritionGoal]:
        """Plan, back-fill missing profile fields and persist the goal.

        Any earlier goal is replaced.
        """
        plan = self.preview(profiles, user_id, request)

        updates = self.resolver.fill_missing_profile_fields(
            profiles.get_profile(user_id), self._entered_profile(request)
        )
        if updates:
            profiles.update_profile(user_id, updates)
        if request.weight is not None and profiles.get_latest_weight(user_id) is None:
            profiles.log_weight(user_id, request.weight)

        record = self.mapper.to_record(plan, start_date or datetime.utcnow())
        settings.save_goal(user_id, record)
        logger.info(
            "Nutrition goal saved for user %s: %s plan, %s kcal/day, %s weeks",
            user_id, plan.plan_type, plan.daily_calories, plan.timeline_weeks
        )
        return plan, record

    def active_goal(self, settings: SettingsStore, user_id: str) -> PersistedNutritionGoal:
        """The user's enabled goal.

        Raises:
            NotFoundError: If there is no goal or it has been disabled.
        """
        record = settings.load_goal(user_id)
        if record is None or not record.enabled:
            raise NotFoundError("NutritionGoal", user_id)
        return record

    def current_plan(self, profiles: ProfileStore, settings: SettingsStore, user_id: str) -> PlanResult:
        record = self.active_goal(settings, user_id)
        return self.mapper.from_record(record, fallback_weight=profiles.get_latest_weight(user_id))

    def day_target(
        self,
        settings: SettingsStore,
        user_id: str,
        day: date,
        consumed: Optional[float] = None,
    ) -> DayTargetResponse:
        record = self.active_goal(settings, user_id)
        target = self.mapper.resolve_day_target(record, day)
        return DayTargetResponse(
            target_date=day,
            day=DAY_NAMES[monday_first_day_index(day)],
            target_calories=target,
            consumed_calories=consumed,
            goal_met=calorie_goal_met(consumed, target),
        )

    def override_day(self, settings: SettingsStore, user_id: str, day: date, calories: float) -> PersistedNutritionGoal:
        record = self.mapper.override_day_target(self.active_goal(settings, user_id), day, calories)
        return settings.save_goal(user_id, record)

    def disable_goal(self, settings: SettingsStore, user_id: str) -> None:
        settings.save_goal(user_id, self.mapper.disabled_record())
        logger.info("Nutrition goal disabled for user %s", user_id)

    @staticmethod
    def _goal_input(request: GoalPlanRequest) -> GoalInput:
        return GoalInput(
            target_weight_lbs=request.target_weight,
            weight_change_rate_lbs_per_week=request.weight_change_rate,
            plan_type=request.plan_type,
        )

    @staticmethod
    def _entered_profile(request: GoalPlanRequest) -> dict:
        return {
            "age": request.age,
            "height": request.height,
            "gender": request.gender,
            "weight": request.weight,
        }


goal_planner = GoalPlanner()
__all__ = ["GoalPlanner", "goal_planner"]
