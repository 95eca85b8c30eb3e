from pydantic import BaseModel, Field, StrictBool
from typing import List, Optional
from datetime import datetime
from uuid import UUID


class MealCreate(BaseModel):
    """Schema for creating a meal"""

    description: str = Field(..., min_length=1, description="What was eaten")
    in_diet: StrictBool = Field(
        ..., alias="inDiet", description="Whether the meal is within the diet"
    )

    model_config = {"populate_by_name": True}


class MealUpdate(MealCreate):
    """Schema for replacing a meal's description and diet flag"""


class MealResponse(BaseModel):
    """Schema for meal response"""

    id: UUID
    session_id: Optional[UUID]
    description: str
    created_at: datetime
    in_diet: bool

    model_config = {"from_attributes": True}


class DietMetricsResponse(BaseModel):
    """Diet adherence report for one session"""

    meals: int = Field(..., ge=0, description="Total number of meals")
    meals_in_diet: int = Field(..., ge=0, alias="mealsInDiet")
    meals_off_diet: int = Field(..., ge=0, alias="mealsOffDiet")
    best_diet_sequence: List[MealResponse] = Field(
        default_factory=list,
        alias="bestDietSequence",
        description="Longest run of consecutive in-diet meals, oldest first",
    )

    model_config = {"populate_by_name": True}
