"""Profile API router.

Exposes the profile store fields the planner depends on, partial updates
and weigh-ins. The response includes the BMR the profile currently yields
so clients can tell whether planning is possible.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from database.deps import get_db_read, get_db_write
from core.logger import get_logger
from schemas.profile_schema import (
    ProfileResponse,
    ProfileUpdateRequest,
    WeightLogRequest,
    WeightLogResponse,
)
from services.metabolic_calculator import metabolic_calculator
from services.profile_resolver import profile_resolver
from services.profile_store import ProfileStore

logger = get_logger("api.profile")
router = APIRouter(prefix="/api/profile", tags=["profile"])


def _profile_response(store: ProfileStore, user_id: str) -> ProfileResponse:
    stored = store.get_profile(user_id)
    weight = store.get_latest_weight(user_id)
    profile = profile_resolver.resolve(stored, latest_weight=weight)
    return ProfileResponse(
        user_id=user_id,
        age=stored["age"],
        height=stored["height"],
        gender=stored["gender"],
        weight=weight,
        bmr=metabolic_calculator.compute_bmr(profile),
        missing_fields=profile_resolver.missing_fields(profile),
    )


@router.get("/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: str, db: Session = Depends(get_db_read)):
    """Return the stored profile, latest weight and resulting BMR.

    A user without a profile gets empty fields and a BMR of 0.
    """
    return _profile_response(ProfileStore(db), user_id)


@router.patch("/{user_id}", response_model=ProfileResponse)
def update_profile(user_id: str, payload: ProfileUpdateRequest, db: Session = Depends(get_db_write)):
    """Write only the profile fields present in the request body.

    Raises:
        DatabaseError: If the profile cannot be saved.
    """
    store = ProfileStore(db)
    store.update_profile(user_id, payload.model_dump(exclude_unset=True))
    return _profile_response(store, user_id)


@router.post("/{user_id}/weights", response_model=WeightLogResponse, status_code=201)
def log_weight(user_id: str, payload: WeightLogRequest, db: Session = Depends(get_db_write)):
    """Record a weigh-in; the most recent one feeds future plans."""
    entry = ProfileStore(db).log_weight(user_id, payload.weight_lbs, payload.log_date)
    logger.info("Weight logged for user %s: %s lbs", user_id, entry.weight_lbs)
    return WeightLogResponse(
        id=entry.id,
        user_id=entry.user_id,
        weight_lbs=entry.weight_lbs,
        log_date=entry.log_date.isoformat(),
    )
