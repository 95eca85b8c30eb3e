"""Meal tracking and diet metrics routes

Each handler runs the same pipeline: resolve the session (dependency),
validate path and body (Pydantic), call MealService, map the result.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from domain.models import get_db_session
from domain.mappers import MealMapper
from domain.schemas.meal_schemas import (
    MealCreate,
    MealUpdate,
    MealResponse,
    DietMetricsResponse,
)
from services.meal_service import MealService
from api.session import (
    SessionScopedRoute,
    require_session,
    resolve_or_issue_session,
)

router = APIRouter(prefix="/meals", tags=["Meals"], route_class=SessionScopedRoute)
logger = logging.getLogger("dailydiet.api.meals")


@router.get("", response_model=List[MealResponse])
def list_meals(
    session_id: UUID = Depends(require_session),
    db: Session = Depends(get_db_session),
):
    """List the session's meals, oldest first"""
    meals = MealService.list_meals(db, session_id)
    return MealMapper.to_response_list(meals)


@router.get("/metrics", response_model=DietMetricsResponse)
def get_metrics(
    session_id: UUID = Depends(require_session),
    db: Session = Depends(get_db_session),
):
    """
    Diet adherence report for the session.

    Returns the total number of meals, how many were in and off the diet,
    and the longest run of consecutive in-diet meals (first one wins on ties).

    Example response:
    {
        "meals": 7,
        "mealsInDiet": 5,
        "mealsOffDiet": 2,
        "bestDietSequence": [{...}, {...}, {...}]
    }
    """
    report = MealService.get_metrics(db, session_id)
    return MealMapper.to_metrics_response(report)


@router.get("/{meal_id}", response_model=MealResponse)
def get_meal(
    meal_id: UUID,
    session_id: UUID = Depends(require_session),
    db: Session = Depends(get_db_session),
):
    """Get one of the session's meals"""
    meal = MealService.get_meal(db, session_id, meal_id)
    return MealMapper.to_response(meal)


@router.post("", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
def create_meal(
    payload: MealCreate,
    session_id: UUID = Depends(resolve_or_issue_session),
    db: Session = Depends(get_db_session),
):
    """
    Log a meal.

    Without a session cookie a new session is started and returned in the
    Set-Cookie header; reuse it on every following request.
    """
    meal = MealService.create_meal(db, session_id, payload.description, payload.in_diet)
    return MealMapper.to_response(meal)


@router.put(
    "/{meal_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
def update_meal(
    meal_id: UUID,
    payload: MealUpdate,
    session_id: UUID = Depends(require_session),
    db: Session = Depends(get_db_session),
):
    """Replace a meal's description and diet flag"""
    MealService.update_meal(
        db, session_id, meal_id, payload.description, payload.in_diet
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{meal_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
def delete_meal(
    meal_id: UUID,
    session_id: UUID = Depends(require_session),
    db: Session = Depends(get_db_session),
):
    """Delete a meal"""
    MealService.delete_meal(db, session_id, meal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
