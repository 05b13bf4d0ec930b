"""
Pydantic schemas for walking plans and vitals assessments.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WalkingRecommendationResponse(BaseModel):
    """Schema for the walking plan matching the client's BMI category."""
    daily_steps: int = Field(..., alias="dailySteps", examples=[10000])
    duration: str = Field(..., examples=["30-45 minutes"])
    intensity: str = Field(..., examples=["Moderate pace"])
    tips: List[str]

    model_config = ConfigDict(populate_by_name=True)


class ReadingStatusResponse(BaseModel):
    label: str = Field(..., examples=["Normal"])
    level: str = Field(..., description="success, info, warning or danger", examples=["success"])
    description: str


class StepProgressResponse(BaseModel):
    steps: int
    goal: int
    percent: float
    goal_reached: bool = Field(..., alias="goalReached")

    model_config = ConfigDict(populate_by_name=True)


class AssessmentResponse(BaseModel):
    """Schema for the classification of the current health metric."""
    heart_rate: ReadingStatusResponse = Field(..., alias="heartRate")
    blood_pressure: Optional[ReadingStatusResponse] = Field(None, alias="bloodPressure")
    steps: StepProgressResponse

    model_config = ConfigDict(populate_by_name=True)
