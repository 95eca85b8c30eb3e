"""
Meal (diet entry) model.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    Text,
    Boolean,
    DateTime,
    Index,
    Uuid,
)
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, the convention for every stored datetime"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Meal(Base):
    """A meal logged by an anonymous session"""

    __tablename__ = "meals"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    session_id = Column(Uuid(as_uuid=True), nullable=True)
    description = Column(Text, nullable=False)
    created_at = Column(
        DateTime, nullable=False, default=utcnow, server_default=func.now()
    )
    in_diet = Column(Boolean, nullable=False)

    __table_args__ = (Index("ix_meals_session_id", "session_id"),)

    def __repr__(self) -> str:
        return (
            f"<Meal id={self.id} session_id={self.session_id} "
            f"in_diet={self.in_diet} created_at={self.created_at}>"
        )
