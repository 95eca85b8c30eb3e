"""Services package - Business logic layer"""

from services.meal_service import MealService

# Note: diet_metrics contains pure functions, not a class

__all__ = [
    "MealService",
]
