"""Tests for weekly schedule allocation."""
import pytest
from core.exceptions import ValidationError
from services.safety import SafetyEnforcer
from services.schedule_allocator import ScheduleAllocator

allocator = ScheduleAllocator()
safety = SafetyEnforcer()


def _calories(schedule):
    return [d.calories for d in schedule]


def test_standard_schedule_is_flat():
    schedule = allocator.allocate("standard", 2060, 1862)
    assert [d.day for d in schedule] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert _calories(schedule) == [2060] * 7
    assert sum(_calories(schedule)) / 7 == 2060


def test_auto_matches_standard_at_creation():
    assert allocator.allocate("auto", 1784, 2230) == allocator.allocate("standard", 1784, 2230)


def test_weekender_moves_calories_to_friday_and_saturday():
    calories = _calories(allocator.allocate("weekender", 2000, 1500))
    assert calories == [1880, 1880, 1880, 1880, 2300, 2300, 1880]
    assert sum(calories) == 7 * 2000


def test_weekender_increase_is_throttled_by_floor():
    # floor is max(1440, 1200) = 1440, so weekdays can only give up 60 each
    calories = _calories(allocator.allocate("weekender", 1500, 1800))
    assert calories == [1440, 1440, 1440, 1440, 1650, 1650, 1440]


def test_weekender_at_floor_stays_flat():
    assert _calories(allocator.allocate("weekender", 1440, 1800)) == [1440] * 7


@pytest.mark.parametrize("daily, bmr", [
    (1200, 1000), (1500, 1800), (1784, 2230), (2000, 1500), (2566, 2230), (3100, 1700), (1333, 1400),
])
def test_weekender_bounds(daily, bmr):
    calories = _calories(allocator.allocate("weekender", daily, bmr))
    weekend = calories[4:6]
    weekdays = calories[:4] + calories[6:]
    assert len(calories) == 7
    assert min(weekend) >= max(weekdays)
    assert min(calories) >= safety.min_safe_calories(bmr)
    assert max(calories) <= int(daily * 1.2 + 0.5)


@pytest.mark.parametrize("plan_type", ["standard", "weekender", "auto"])
def test_allocation_is_deterministic(plan_type):
    assert allocator.allocate(plan_type, 2222, 1900) == allocator.allocate(plan_type, 2222, 1900)


def test_unknown_plan_type_raises():
    with pytest.raises(ValidationError):
        allocator.allocate("cyclical", 2000, 1500)
