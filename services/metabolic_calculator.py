"""Metabolic baseline calculation.

BMR uses the Mifflin-St Jeor equation in imperial units (pounds, inches);
TDEE scales it by a fixed activity multiplier. Both are rounded half up.
"""

from core.exceptions import ValidationError
from core.logger import get_logger
from core.rounding import round_half_up
from schemas.goal_schema import MetabolicResult
from schemas.profile_schema import Profile
from services.profile_resolver import parse_height_to_inches

logger = get_logger("services.metabolic_calculator")

ACTIVITY_MULTIPLIERS = {
    'sedentary': 1.2,   # little to no exercise
    'light': 1.375,     # light exercise 1-3 days/week
    'moderate': 1.55,   # moderate exercise 3-5 days/week
    'very': 1.725,      # hard exercise 6-7 days/week
    'extra': 1.9,       # very hard exercise or physical job
}


class MetabolicCalculator:
    """Class-based BMR/TDEE calculator used by the goal planner."""

    def compute_bmr(self, profile: Profile) -> int:
        """Calculate BMR, or 0 when the profile is incomplete.

        Every sex other than 'male' takes the -161 offset.
        """
        if not (profile.age_years and profile.weight_lbs and profile.height_text and profile.sex):
            return 0
        height_inches = parse_height_to_inches(profile.height_text)
        if not height_inches:
            return 0

        base = 10 * profile.weight_lbs + 6.25 * height_inches - 5 * profile.age_years
        bmr = base + 5 if profile.sex == 'male' else base - 161
        val = max(round_half_up(bmr), 0)
        logger.debug("BMR calculated: %s", val)
        return val

    def compute_tdee(self, bmr: int, activity_level: str) -> int:
        """Estimate TDEE from BMR and the activity multiplier."""
        try:
            multiplier = ACTIVITY_MULTIPLIERS[activity_level]
        except KeyError:
            raise ValidationError(
                f"Unknown activity level '{activity_level}'", field="activity_level"
            ) from None
        val = round_half_up(bmr * multiplier)
        logger.debug("TDEE calculated: %s (x%s)", val, multiplier)
        return val

    def compute(self, profile: Profile) -> MetabolicResult:
        bmr = self.compute_bmr(profile)
        return MetabolicResult(bmr=bmr, tdee=self.compute_tdee(bmr, profile.activity_level))


metabolic_calculator = MetabolicCalculator()
__all__ = ["MetabolicCalculator", "metabolic_calculator", "ACTIVITY_MULTIPLIERS"]
