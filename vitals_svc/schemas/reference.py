"""
Pydantic schemas for the static reference catalog.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ExerciseResponse(BaseModel):
    id: int
    name: str
    category: str = Field(..., description="cardio, strength, flexibility or balance")
    description: str
    benefits: List[str]
    duration: str
    intensity: str = Field(..., description="low, moderate or high")
    heart_health_rating: int = Field(..., alias="heartHealthRating", ge=1, le=5)
    calories_burned: Optional[int] = Field(None, alias="caloriesBurned")

    model_config = ConfigDict(populate_by_name=True)


class NutrientsResponse(BaseModel):
    protein: str
    fiber: str
    vitamins: List[str]


class FoodResponse(BaseModel):
    id: int
    name: str
    category: str = Field(..., description="fruits, vegetables, proteins, grains, dairy or nuts")
    description: str
    benefits: List[str]
    calories: int
    nutrients: NutrientsResponse
    heart_healthy: bool = Field(..., alias="heartHealthy")

    model_config = ConfigDict(populate_by_name=True)


class HeartTipResponse(BaseModel):
    id: int
    title: str
    description: str
    category: str = Field(..., description="walking, exercise, diet, monitoring or lifestyle")
    importance: str = Field(..., description="critical, important or helpful")


class HeartRateReferenceResponse(BaseModel):
    """Resting, maximum and moderate-exercise heart-rate ranges for an age band."""
    age_group: str = Field(..., alias="ageGroup", examples=["Adults (26-35 years)"])
    resting_min: int = Field(..., alias="restingMin")
    resting_max: int = Field(..., alias="restingMax")
    max_heart_rate: int = Field(..., alias="maxHeartRate")
    moderate_min: int = Field(..., alias="moderateMin")
    moderate_max: int = Field(..., alias="moderateMax")

    model_config = ConfigDict(populate_by_name=True)
