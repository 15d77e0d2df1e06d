"""Tests for the safety floor and capped range."""
from services.safety import SafetyEnforcer, MIN_SAFE_FLOOR

safety = SafetyEnforcer()


def test_min_safe_never_below_1200():
    assert safety.min_safe_calories(0) == MIN_SAFE_FLOOR == 1200
    assert safety.min_safe_calories(1400) == 1200
    assert safety.min_safe_calories(2230) == 1784


def test_min_safe_is_monotonic_in_bmr():
    values = [safety.min_safe_calories(bmr) for bmr in range(0, 4001, 7)]
    assert values == sorted(values)
    assert min(values) >= 1200


def test_capped_range():
    assert safety.capped_range(2000, 1500) == (1600, 2400)
    # floor wins over -20% when BMR is high relative to the target
    assert safety.capped_range(1500, 1800) == (1440, 1800)
    assert safety.cap_percent == 20
