"""SQLAlchemy ORM models backing the profile and settings stores.

The planning engine never touches these directly: it reads and writes
through `services.profile_store` and `services.settings_store`. The
nutrition goal is stored as a JSON-encoded document on the settings row.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, Index
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class UserProfile(Base):
    """Biometric profile fields owned by the profile store.

    Height is kept as entered, e.g. `5'11"`.
    """

    __tablename__ = "user_profiles"
    user_id = Column(String, primary_key=True, index=True)
    age = Column(Integer, nullable=True)
    height = Column(String, nullable=True)
    gender = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class WeightLog(Base):
    """A single weigh-in; the latest one is the profile's current weight."""

    __tablename__ = "weight_logs"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False)
    weight_lbs = Column(Float, nullable=False)
    log_date = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (Index("ix_weight_logs_user_date", "user_id", "log_date"),)


class UserSettings(Base):
    """Per-user settings record holding the persisted nutrition goal."""

    __tablename__ = "user_settings"
    user_id = Column(String, primary_key=True, index=True)
    nutrition_goal = Column(Text, nullable=True)  # JSON
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
