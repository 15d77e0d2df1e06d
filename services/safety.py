"""Safety floor and cap for daily calorie targets."""

from typing import Tuple

from core.rounding import round_half_up

MIN_SAFE_FLOOR = 1200
BMR_FLOOR_FACTOR = 0.8
CAP_PERCENT = 20


class SafetyEnforcer:
    """Derives the lowest allowed daily target and the per-day range."""

    cap_percent = CAP_PERCENT

    def min_safe_calories(self, bmr: int) -> int:
        """max(1200, 80% of BMR)."""
        return max(MIN_SAFE_FLOOR, round_half_up(bmr * BMR_FLOOR_FACTOR))

    def capped_range(self, base_target: float, bmr: int) -> Tuple[int, int]:
        """Lowest and highest calories a single day may take.

        The range is base_target +/- CAP_PERCENT, with the low end never
        under the safety floor.
        """
        cap = self.cap_percent / 100
        ceiling = round_half_up(base_target * (1 + cap))
        floor = max(self.min_safe_calories(bmr), round_half_up(base_target * (1 - cap)))
        return floor, ceiling


safety_enforcer = SafetyEnforcer()
__all__ = ["SafetyEnforcer", "safety_enforcer", "MIN_SAFE_FLOOR", "CAP_PERCENT"]
