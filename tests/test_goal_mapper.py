"""Tests for converting plans to and from the persisted goal record."""
from datetime import date, datetime, timedelta

import pytest
from schemas.goal_schema import DayCalories, PersistedNutritionGoal, PlanResult, PlanRules
from services.goal_mapper import GoalPersistenceMapper, calorie_goal_met, monday_first_day_index

mapper = GoalPersistenceMapper()

START = datetime(2026, 10, 12, 8, 30)  # a Monday
WEEK = [date(2026, 10, 12) + timedelta(days=i) for i in range(7)]


def _plan(schedule=(1880, 1880, 1880, 1880, 2300, 2300, 1880)):
    return PlanResult(
        current_weight=200,
        target_weight=180,
        weight_to_lose_abs=20,
        bmr=1500,
        tdee=2500,
        daily_calories=2000,
        weekly_deficit=500,
        timeline_weeks=20,
        activity_level="light",
        weight_change_rate=1,
        plan_type="weekender",
        schedule=[DayCalories(day=d, calories=c) for d, c in zip(["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"], schedule)],
        rules=PlanRules(min_safe_calories=1200),
    )


def test_monday_first_day_index():
    assert [monday_first_day_index(d) for d in WEEK] == list(range(7))
    assert monday_first_day_index(date(2026, 10, 18)) == 6


def test_to_record_flattens_schedule_and_estimates_end():
    record = mapper.to_record(_plan(), START)
    assert record.enabled is True
    assert record.weekly_schedule == [1880, 1880, 1880, 1880, 2300, 2300, 1880]
    assert record.daily_calorie_target == 2000
    assert record.min_safe_calories == 1200
    assert record.bmr == 1500 and record.tdee == 2500
    assert record.plan_type == "weekender"
    assert record.estimated_end_date == START + timedelta(days=140)


def test_resolve_day_target_round_trips_every_weekday():
    plan = _plan((1801, 1802, 1803, 1804, 2305, 2306, 1807))
    restored = PersistedNutritionGoal.model_validate(mapper.to_record(plan, START).model_dump(mode="json"))
    for i, day in enumerate(WEEK):
        assert mapper.resolve_day_target(restored, day) == plan.schedule[i].calories


@pytest.mark.parametrize("schedule", [None, [2000, 2100], "1880,1880", [1, 2, 3, 4, 5, 6, "x"]])
def test_resolve_day_target_falls_back_to_daily_target(schedule):
    record = PersistedNutritionGoal.model_validate(
        {"enabled": True, "daily_calorie_target": 2050.4, "weekly_schedule": schedule}
    )
    assert record.weekly_schedule is None
    assert mapper.resolve_day_target(record, date(2026, 10, 16)) == 2050


def test_from_record_rebuilds_plan():
    plan = mapper.from_record(mapper.to_record(_plan(), START))
    assert [d.day for d in plan.schedule] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert plan.schedule[4].calories == 2300
    assert plan.weight_to_lose_abs == 20
    assert plan.weekly_deficit == 500
    assert plan.rules.min_safe_calories == 1200
    assert plan.rules.cap_percent == 20
    assert plan.rules.auto_adjust is False


def test_from_record_malformed_schedule_is_zeroed():
    record = PersistedNutritionGoal.model_validate(
        {"enabled": True, "plan_type": "auto", "weekly_schedule": [2000] * 6, "daily_calorie_target": 2000}
    )
    plan = mapper.from_record(record, fallback_weight=190, fallback_activity_level="sedentary")
    assert [d.calories for d in plan.schedule] == [0] * 7
    assert plan.current_weight == 190
    assert plan.weight_to_lose_abs == 0
    assert plan.rules.min_safe_calories == 1200
    assert plan.rules.auto_adjust is True
    assert plan.activity_level == "sedentary"


def test_null_schedule_entries_read_as_zero():
    record = PersistedNutritionGoal.model_validate(
        {"enabled": True, "weekly_schedule": [2000, None, 2000, 2000, 2000, 2000, 2000]}
    )
    assert mapper.resolve_day_target(record, WEEK[1]) == 0


def test_override_day_target_clamps_to_floor():
    record = mapper.to_record(_plan(), START)
    updated = mapper.override_day_target(record, date(2026, 10, 14), 900)
    assert updated.weekly_schedule[2] == 1200
    assert record.weekly_schedule[2] == 1880

    updated = mapper.override_day_target(updated, date(2026, 10, 18), 2450.6)
    assert updated.weekly_schedule[6] == 2451


def test_override_without_schedule_expands_daily_target():
    record = PersistedNutritionGoal(enabled=False, daily_calorie_target=1900, min_safe_calories=1500)
    updated = mapper.override_day_target(record, date(2026, 10, 16), 2200)
    assert updated.enabled is True
    assert updated.weekly_schedule == [1900, 1900, 1900, 1900, 2200, 1900, 1900]


@pytest.mark.parametrize("consumed, target, met", [
    (2000, 2000, True), (1999, 2000, False), (2500, 2000, True), (None, 2000, False), (500, 0, False),
])
def test_calorie_goal_met(consumed, target, met):
    assert calorie_goal_met(consumed, target) is met
