"""
Meal domain mappers.
Handles transformation between ORM models and DTOs for meals and metrics.
"""

from typing import Iterable, List

from domain.models import Meal
from domain.schemas.meal_schemas import MealResponse, DietMetricsResponse
from services.diet_metrics import DietReport


class MealMapper:
    """Mapper for meal-related transformations."""

    @staticmethod
    def to_response(meal: Meal) -> MealResponse:
        return MealResponse.model_validate(meal)

    @staticmethod
    def to_response_list(meals: Iterable[Meal]) -> List[MealResponse]:
        return [MealMapper.to_response(m) for m in meals]

    @staticmethod
    def to_metrics_response(report: DietReport) -> DietMetricsResponse:
        """
        Convert a DietReport into the public metrics payload.

        Args:
            report: aggregate computed over one session's meals

        Returns:
            DietMetricsResponse serialized as
            {meals, mealsInDiet, mealsOffDiet, bestDietSequence}
        """
        return DietMetricsResponse(
            meals=report.total,
            meals_in_diet=report.in_diet_count,
            meals_off_diet=report.off_diet_count,
            best_diet_sequence=MealMapper.to_response_list(report.best_sequence),
        )
