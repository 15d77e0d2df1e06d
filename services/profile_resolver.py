"""Profile normalization for the metabolic calculator.

Profile data arrives loosely typed from the profile store and from what the
user typed into the planner (ages as strings, heights like `5'11"`, free
form gender). `ProfileResolver` turns that into a `Profile` and reports
which fields are still unusable.
"""

import re
from typing import Any, Dict, List, Optional

from core.logger import get_logger
from schemas.profile_schema import Profile, SEXES

logger = get_logger("services.profile_resolver")

HEIGHT_PATTERN = re.compile(r"(\d+)'(\d+)\"")

# profile store keys that a planning session may fill in
PROFILE_STORE_FIELDS = ("age", "height", "gender")


def parse_height_to_inches(height_text: Optional[str]) -> Optional[int]:
    """Convert `5'11"` style text to total inches.

    Returns None when the text does not contain a feet/inches pair or the
    result is zero.
    """
    if not height_text:
        return None
    match = HEIGHT_PATTERN.search(str(height_text))
    if not match:
        return None
    inches = int(match.group(1)) * 12 + int(match.group(2))
    return inches or None


def _positive_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ProfileResolver:
    """Builds `Profile` snapshots from stored and user-entered values."""

    def normalize_sex(self, value: Any) -> Optional[str]:
        """Map free-form gender text onto male/female/other/unspecified.

        Empty input stays None so the profile counts as incomplete.
        """
        if _blank(value):
            return None
        text = str(value).strip().lower()
        if text in SEXES:
            return text
        if text in ("m", "man"):
            return "male"
        if text in ("f", "woman"):
            return "female"
        return "unspecified"

    def resolve(
        self,
        stored: Dict[str, Any],
        latest_weight: Optional[float] = None,
        activity_level: str = "sedentary",
        overrides: Optional[Dict[str, Any]] = None,
    ) -> Profile:
        """Merge stored profile values with session overrides.

        Args:
            stored: `{age, height, gender}` as returned by the profile store.
            latest_weight: Most recent weigh-in in pounds, if any.
            activity_level: Activity level chosen for this session.
            overrides: Values the user entered in the session; non-blank
                entries win over the stored ones.

        Returns:
            A `Profile` whose unusable fields are None.
        """
        merged = dict(stored or {})
        merged.setdefault("weight", latest_weight)
        for key, value in (overrides or {}).items():
            if not _blank(value):
                merged[key] = value

        height = merged.get("height")
        profile = Profile(
            age_years=_positive_number(merged.get("age")),
            weight_lbs=_positive_number(merged.get("weight")),
            height_text=None if _blank(height) else str(height).strip(),
            sex=self.normalize_sex(merged.get("gender")),
            activity_level=activity_level,
        )
        logger.debug("Resolved profile: %s", profile.model_dump())
        return profile

    def missing_fields(self, profile: Profile) -> List[str]:
        """Names of the fields that keep a BMR from being computed."""
        missing = []
        if profile.age_years is None:
            missing.append("age")
        if profile.weight_lbs is None:
            missing.append("weight")
        if parse_height_to_inches(profile.height_text) is None:
            missing.append("height")
        if profile.sex is None:
            missing.append("gender")
        return missing

    def fill_missing_profile_fields(self, stored: Dict[str, Any], entered: Dict[str, Any]) -> Dict[str, Any]:
        """Return the subset of `entered` the profile store does not hold yet.

        Values already stored are never overwritten by a planning session.
        """
        updates = {}
        for key in PROFILE_STORE_FIELDS:
            value = entered.get(key)
            if not _blank(value) and _blank((stored or {}).get(key)):
                updates[key] = value
        return updates


profile_resolver = ProfileResolver()
__all__ = ["ProfileResolver", "profile_resolver", "parse_height_to_inches"]
