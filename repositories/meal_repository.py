"""
Meal Repository - Data access layer for session-scoped meal operations

Every lookup filters on session_id inside the query itself, so a meal owned
by another session is indistinguishable from one that does not exist.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import and_, func

from repositories.base import BaseRepository
from domain.models import Meal


class MealRepository(BaseRepository[Meal]):
    """Repository for meal data access"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def get_for_session(self, session_id: UUID, meal_id: UUID) -> Optional[Meal]:
        """Get a meal by ID, only if it belongs to the session"""
        return (
            self.db.query(Meal)
            .filter(and_(Meal.id == meal_id, Meal.session_id == session_id))
            .first()
        )

    def list_by_session(self, session_id: UUID) -> List[Meal]:
        """Get all meals for a session, oldest first

        Equal timestamps (two creates racing in one session) fall back to the
        meal id, so every backend returns them in the same order on each read.
        """
        return (
            self.db.query(Meal)
            .filter(Meal.session_id == session_id)
            .order_by(Meal.created_at.asc(), Meal.id.asc())
            .all()
        )

    def latest_created_at(self, session_id: UUID) -> Optional[datetime]:
        """Creation time of the session's newest meal"""
        return (
            self.db.query(func.max(Meal.created_at))
            .filter(Meal.session_id == session_id)
            .scalar()
        )

    def create_meal(
        self,
        session_id: UUID,
        description: str,
        in_diet: bool,
        created_at: datetime = None,
    ) -> Meal:
        """Insert a new meal for the session"""
        meal = Meal(session_id=session_id, description=description, in_diet=in_diet)
        if created_at is not None:
            meal.created_at = created_at
        return self.create(meal)

    def update_for_session(
        self, session_id: UUID, meal_id: UUID, description: str, in_diet: bool
    ) -> Optional[Meal]:
        """Overwrite description and in_diet of an owned meal; None if not owned"""
        meal = self.get_for_session(session_id, meal_id)
        if meal is None:
            return None
        meal.description = description
        meal.in_diet = in_diet
        return self.update(meal)

    def delete_for_session(self, session_id: UUID, meal_id: UUID) -> bool:
        """Delete an owned meal; False if no such meal exists in the session"""
        count = (
            self.db.query(Meal)
            .filter(and_(Meal.id == meal_id, Meal.session_id == session_id))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return count > 0
