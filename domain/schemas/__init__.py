"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.meal_schemas import (
    MealCreate,
    MealUpdate,
    MealResponse,
    DietMetricsResponse,
)

__all__ = [
    "MealCreate",
    "MealUpdate",
    "MealResponse",
    "DietMetricsResponse",
]
