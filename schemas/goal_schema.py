"""Schemas for nutrition goal planning.

`PlanResult` is the computed plan shown to the user; `PersistedNutritionGoal`
is the flattened record the settings store keeps. The two are converted by
`services.goal_mapper`.
"""

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from typing import Annotated, List, Literal, Optional
from datetime import date, datetime
from numbers import Real

from schemas.profile_schema import ActivityLevel

PlanType = Literal["standard", "weekender", "auto"]

PLAN_TYPES = ("standard", "weekender", "auto")
WEIGHT_CHANGE_RATES = (0.5, 1.0, 1.5, 2.0, 2.5)
DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _check_rate(value: float) -> float:
    if value not in WEIGHT_CHANGE_RATES:
        raise ValueError(f"weight change rate must be one of {list(WEIGHT_CHANGE_RATES)} lb/week")
    return value


WeightChangeRate = Annotated[float, AfterValidator(_check_rate)]


class GoalInput(BaseModel):
    """What the user asks for in a planning session."""

    target_weight_lbs: float = Field(..., gt=0)
    weight_change_rate_lbs_per_week: WeightChangeRate
    plan_type: PlanType = "standard"


class MetabolicResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    bmr: int = Field(..., ge=0)
    tdee: int = Field(..., ge=0)


class DayCalories(BaseModel):
    day: str
    calories: int


class PlanRules(BaseModel):
    min_safe_calories: int
    cap_percent: int = 20
    auto_adjust: bool = False


class PlanResult(BaseModel):
    """A full calorie plan with its Monday..Sunday schedule."""

    current_weight: float
    target_weight: float
    weight_to_lose_abs: float
    bmr: int
    tdee: int
    daily_calories: int
    weekly_deficit: int
    timeline_weeks: int
    activity_level: Optional[str] = None
    weight_change_rate: float
    plan_type: PlanType = "standard"
    schedule: List[DayCalories]
    rules: PlanRules
    floor_applied: bool = False

    @field_validator("schedule")
    @classmethod
    def check_seven_days(cls, value):
        if len(value) != 7:
            raise ValueError("schedule must hold exactly 7 days")
        return value


class PersistedNutritionGoal(BaseModel):
    """Durable goal record as stored under `nutrition_goal` in settings.

    Only `enabled` is guaranteed; a disabled goal may be just
    `{"enabled": false}`. A `weekly_schedule` that is not a list of seven
    numbers is read as absent.
    """

    model_config = ConfigDict(extra="ignore")

    enabled: bool = False
    start_date: Optional[datetime] = None
    start_weight: Optional[float] = None
    target_weight: Optional[float] = None
    activity_level: Optional[str] = None
    weight_change_rate: Optional[float] = None
    plan_type: Optional[str] = None
    daily_calorie_target: Optional[float] = None
    weekly_schedule: Optional[List[float]] = None
    min_safe_calories: Optional[float] = None
    bmr: Optional[float] = None
    tdee: Optional[float] = None
    timeline_weeks: Optional[int] = None
    estimated_end_date: Optional[datetime] = None

    @field_validator("weekly_schedule", mode="before")
    @classmethod
    def tolerate_malformed_schedule(cls, value):
        if not isinstance(value, (list, tuple)) or len(value) != 7:
            return None
        days = []
        for entry in value:
            if entry is None:
                days.append(0.0)
            elif isinstance(entry, Real) and not isinstance(entry, bool):
                days.append(float(entry))
            else:
                return None
        return days


class GoalPlanRequest(BaseModel):
    """Planning session payload.

    Profile fields are optional overrides of what the profile store holds;
    weight defaults to the latest weigh-in.
    """

    target_weight: float = Field(..., gt=0, examples=[180.0], description="Goal weight in pounds")
    weight_change_rate: WeightChangeRate = Field(..., examples=[1.0], description="Pounds per week: 0.5, 1, 1.5, 2 or 2.5")
    plan_type: PlanType = Field("standard", examples=["weekender"], description="standard, weekender or auto")
    activity_level: ActivityLevel = Field("sedentary", examples=["light"], description="sedentary, light, moderate, very or extra")
    age: Optional[int] = Field(None, ge=13, le=120, examples=[45])
    height: Optional[str] = Field(None, examples=["6'0\""])
    gender: Optional[str] = Field(None, examples=["male"])
    weight: Optional[float] = Field(None, gt=0, examples=[200.0], description="Current weight in pounds")


class SavedGoalResponse(BaseModel):
    plan: PlanResult
    record: PersistedNutritionGoal


class DayTargetResponse(BaseModel):
    target_date: date
    day: str
    target_calories: int
    consumed_calories: Optional[float] = None
    goal_met: bool = False


class DayOverrideRequest(BaseModel):
    target_date: date = Field(..., examples=["2026-10-16"])
    calories: float = Field(..., gt=0, examples=[2300])
