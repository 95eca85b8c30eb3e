"""
Domain mappers package - ORM to DTO transformations.
"""

from domain.mappers.meal_mapper import MealMapper

__all__ = ["MealMapper"]
