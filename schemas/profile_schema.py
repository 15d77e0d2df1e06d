"""Schemas for the biometric profile and its store payloads."""

from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime

ActivityLevel = Literal["sedentary", "light", "moderate", "very", "extra"]
Sex = Literal["male", "female", "other", "unspecified"]

ACTIVITY_LEVELS = ("sedentary", "light", "moderate", "very", "extra")
SEXES = ("male", "female", "other", "unspecified")


class Profile(BaseModel):
    """Normalized snapshot fed to the metabolic calculator.

    Any of the biometric fields may be missing; the calculator answers a
    BMR of 0 in that case rather than failing.
    """

    age_years: Optional[float] = None
    weight_lbs: Optional[float] = None
    height_text: Optional[str] = None
    sex: Optional[Sex] = None
    activity_level: ActivityLevel = "sedentary"


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; only the keys sent are written."""

    age: Optional[int] = Field(None, ge=13, le=120, examples=[45], description="Age in years")
    height: Optional[str] = Field(None, examples=["6'0\""], description="Height as feet and inches, e.g. 5'11\"")
    gender: Optional[str] = Field(None, examples=["male"], description="male, female, other or unspecified")


class ProfileResponse(BaseModel):
    """Stored profile with the latest weigh-in and the BMR it yields."""

    user_id: str
    age: Optional[int] = None
    height: Optional[str] = None
    gender: Optional[str] = None
    weight: Optional[float] = None
    bmr: int
    missing_fields: list = []


class WeightLogRequest(BaseModel):
    """A weigh-in to record for the user."""

    weight_lbs: float = Field(..., gt=0, le=1500, examples=[200.0], description="Body weight in pounds")
    log_date: Optional[datetime] = Field(None, description="When the weight was taken (defaults to now)")


class WeightLogResponse(BaseModel):
    id: int
    user_id: str
    weight_lbs: float
    log_date: str
