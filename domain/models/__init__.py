"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    build_engine,
    init_database,
    drop_database,
    get_db_session,
)
from domain.models.meal import Meal, utcnow

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "build_engine",
    "init_database",
    "drop_database",
    "get_db_session",
    # Meal models
    "Meal",
    "utcnow",
]
