"""Tests for the end-to-end planning workflow against the SQLite stores."""
import uuid
from datetime import date, datetime

import pytest
from database import init_db
from database.database import WriteSessionLocal
from core.exceptions import InsufficientDataError, NotFoundError
from schemas.goal_schema import GoalInput, GoalPlanRequest
from schemas.profile_schema import Profile
from services.goal_planner import GoalPlanner
from services.profile_store import ProfileStore
from services.settings_store import SettingsStore

planner = GoalPlanner()


@pytest.fixture(scope="module", autouse=True)
def setup_db():
    """Initialize database before tests."""
    init_db()


@pytest.fixture
def db():
    session = WriteSessionLocal()
    try:
        yield session
    finally:
        session.close()


def _user():
    return f"user-{uuid.uuid4().hex[:8]}"


def test_build_plan_scenario():
    """45 y/o male, 200 lb, 6'0", light activity, 1 lb/week to 180 lb."""
    profile = Profile(age_years=45, weight_lbs=200, height_text="6'0\"", sex="male", activity_level="light")
    goal = GoalInput(target_weight_lbs=180, weight_change_rate_lbs_per_week=1, plan_type="standard")
    plan = planner.build_plan(profile, goal)
    assert plan.bmr == 2230
    assert plan.tdee == 3066
    assert plan.daily_calories == 2566
    assert plan.rules.min_safe_calories == 1784
    assert plan.timeline_weeks == 20
    assert [d.calories for d in plan.schedule] == [2566] * 7
    assert plan.floor_applied is False


def test_build_plan_keeps_daily_target_above_floor():
    profile = Profile(age_years=60, weight_lbs=140, height_text="5'2\"", sex="female", activity_level="sedentary")
    goal = GoalInput(target_weight_lbs=120, weight_change_rate_lbs_per_week=2, plan_type="weekender")
    plan = planner.build_plan(profile, goal)
    assert plan.daily_calories >= plan.rules.min_safe_calories
    assert plan.floor_applied is True
    assert all(d.calories >= plan.rules.min_safe_calories for d in plan.schedule)


def test_build_plan_reports_missing_fields():
    profile = Profile(age_years=45, weight_lbs=200, height_text="six feet", sex=None)
    goal = GoalInput(target_weight_lbs=180, weight_change_rate_lbs_per_week=1)
    with pytest.raises(InsufficientDataError) as exc_info:
        planner.build_plan(profile, goal)
    assert exc_info.value.details["missing_fields"] == ["height", "gender"]
    assert exc_info.value.status_code == 400


def test_start_tracking_persists_and_backfills_profile(db):
    user_id = _user()
    profiles, settings = ProfileStore(db), SettingsStore(db)
    profiles.update_profile(user_id, {"age": 45})
    request = GoalPlanRequest(target_weight=180, weight_change_rate=1, plan_type="weekender",
                              activity_level="light", age=50, height="6'0\"", gender="male", weight=200)

    plan, record = planner.start_tracking(profiles, settings, user_id, request, start_date=datetime(2026, 10, 12))

    # stored age wins over the session's override for storage, but the session value is used to plan
    assert profiles.get_profile(user_id) == {"age": 45, "height": "6'0\"", "gender": "male"}
    assert profiles.get_latest_weight(user_id) == 200
    assert plan.bmr == 2205
    stored = settings.load_goal(user_id)
    assert stored.enabled is True
    assert stored.weekly_schedule == [d.calories for d in plan.schedule]
    assert stored.estimated_end_date == datetime(2027, 3, 1)
    assert record.plan_type == "weekender"


def test_current_plan_and_day_target(db):
    user_id = _user()
    profiles, settings = ProfileStore(db), SettingsStore(db)
    profiles.update_profile(user_id, {"age": 30, "height": "5'10\"", "gender": "male"})
    profiles.log_weight(user_id, 154)
    request = GoalPlanRequest(target_weight=150, weight_change_rate=0.5, plan_type="weekender", activity_level="moderate")
    plan, _ = planner.start_tracking(profiles, settings, user_id, request)

    restored = planner.current_plan(profiles, settings, user_id)
    assert restored.schedule == plan.schedule
    assert restored.plan_type == "weekender"

    friday = planner.day_target(settings, user_id, date(2026, 10, 16), consumed=5000)
    assert friday.day == "Fri"
    assert friday.target_calories == plan.schedule[4].calories
    assert friday.goal_met is True


def test_override_then_disable(db):
    user_id = _user()
    profiles, settings = ProfileStore(db), SettingsStore(db)
    request = GoalPlanRequest(target_weight=150, weight_change_rate=1, age=35, height="5'6\"",
                              gender="female", weight=170)
    planner.start_tracking(profiles, settings, user_id, request)

    record = planner.override_day(settings, user_id, date(2026, 10, 18), 100)
    assert record.weekly_schedule[6] == record.min_safe_calories
    assert planner.day_target(settings, user_id, date(2026, 10, 18)).target_calories == record.min_safe_calories

    planner.disable_goal(settings, user_id)
    assert settings.get_settings(user_id) == {"nutrition_goal": {"enabled": False}}
    with pytest.raises(NotFoundError):
        planner.current_plan(profiles, settings, user_id)


def test_unreadable_goal_is_treated_as_absent(db):
    user_id = _user()
    settings = SettingsStore(db)
    settings.update_settings(user_id, {"nutrition_goal": {"enabled": "sometimes"}, "theme": "dark"})
    assert settings.load_goal(user_id) is None
    with pytest.raises(NotFoundError):
        planner.active_goal(settings, user_id)
