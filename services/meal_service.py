from typing import List
from datetime import timedelta
from sqlalchemy.orm import Session
import logging
import uuid

from domain.models import Meal, utcnow
from repositories import MealRepository
from services.diet_metrics import DietReport, build_diet_report
from app.exceptions import NotFoundError, ServiceValidationError

logger = logging.getLogger("dailydiet.meals")

# Same message for "missing" and "owned by another session"
MEAL_NOT_FOUND = "Meal not found"


class MealService:
    """Session-scoped meal store: every call takes the caller's session id."""

    @staticmethod
    def _validate_description(description: str) -> None:
        # Whitespace-only text is still a description
        if description is None or description == "":
            raise ServiceValidationError(
                "Meal description must not be empty", code="EMPTY_DESCRIPTION"
            )

    @staticmethod
    def list_meals(db: Session, session_id: uuid.UUID) -> List[Meal]:
        """All meals of the session in creation order; empty for unknown sessions"""
        return MealRepository(db).list_by_session(session_id)

    @staticmethod
    def get_meal(db: Session, session_id: uuid.UUID, meal_id: uuid.UUID) -> Meal:
        """
        Get a single meal owned by the session.

        Raises:
            NotFoundError: If the meal does not exist or belongs to another session
        """
        meal = MealRepository(db).get_for_session(session_id, meal_id)
        if meal is None:
            raise NotFoundError(MEAL_NOT_FOUND)
        return meal

    @staticmethod
    def create_meal(
        db: Session, session_id: uuid.UUID, description: str, in_diet: bool
    ) -> Meal:
        """
        Create a meal for the session.

        The creation timestamp is kept strictly after the session's newest
        meal so that ordering by created_at always reproduces insertion
        order, even when two inserts land on the same clock tick.

        Args:
            db: Database session
            session_id: Owning session
            description: What was eaten
            in_diet: Whether the meal is within the diet

        Returns:
            Meal: The persisted meal with id and created_at assigned

        Raises:
            ServiceValidationError: If the description is missing or empty
        """
        MealService._validate_description(description)
        meal_repo = MealRepository(db)

        try:
            created_at = utcnow()
            latest = meal_repo.latest_created_at(session_id)
            if latest is not None and created_at <= latest:
                created_at = latest + timedelta(microseconds=1)

            meal = meal_repo.create_meal(
                session_id=session_id,
                description=description,
                in_diet=in_diet,
                created_at=created_at,
            )
        except Exception:
            db.rollback()
            logger.exception("Error creating meal for session %s", session_id)
            raise

        logger.info(f"Created meal {meal.id} for session {session_id} (in_diet={in_diet})")
        return meal

    @staticmethod
    def update_meal(
        db: Session,
        session_id: uuid.UUID,
        meal_id: uuid.UUID,
        description: str,
        in_diet: bool,
    ) -> Meal:
        """
        Overwrite description and in_diet of an owned meal.

        id, session_id and created_at are never changed.

        Raises:
            ServiceValidationError: If the description is missing or empty
            NotFoundError: If the meal does not exist or belongs to another session
        """
        MealService._validate_description(description)

        try:
            meal = MealRepository(db).update_for_session(
                session_id, meal_id, description, in_diet
            )
        except Exception:
            db.rollback()
            logger.exception("Error updating meal %s", meal_id)
            raise

        if meal is None:
            raise NotFoundError(MEAL_NOT_FOUND)

        logger.info(f"Updated meal {meal_id} for session {session_id}")
        return meal

    @staticmethod
    def delete_meal(db: Session, session_id: uuid.UUID, meal_id: uuid.UUID) -> None:
        """
        Permanently remove an owned meal.

        Raises:
            NotFoundError: If the meal does not exist or belongs to another session
        """
        try:
            deleted = MealRepository(db).delete_for_session(session_id, meal_id)
        except Exception:
            db.rollback()
            logger.exception("Error deleting meal %s", meal_id)
            raise

        if not deleted:
            raise NotFoundError(MEAL_NOT_FOUND)

        logger.info(f"Deleted meal {meal_id} for session {session_id}")

    @staticmethod
    def get_metrics(db: Session, session_id: uuid.UUID) -> DietReport:
        """Diet adherence report over all of the session's meals"""
        meals = MealService.list_meals(db, session_id)
        report = build_diet_report(meals)
        logger.debug(
            f"Metrics for session {session_id}: total={report.total}, "
            f"in_diet={report.in_diet_count}, best={len(report.best_sequence)}"
        )
        return report
