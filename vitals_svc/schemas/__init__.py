"""
Pydantic schemas for API request/response validation.

This module contains all Pydantic models used at API boundaries.
"""
from schemas.profile import ProfileUpdate, ProfileResponse, BMIResponse
from schemas.health_metric import (
    StepsUpdate,
    HeartRateUpdate,
    BloodPressureUpdate,
    HealthMetricResponse,
)
from schemas.recommendation import (
    WalkingRecommendationResponse,
    ReadingStatusResponse,
    StepProgressResponse,
    AssessmentResponse,
)
from schemas.reference import (
    ExerciseResponse,
    NutrientsResponse,
    FoodResponse,
    HeartTipResponse,
    HeartRateReferenceResponse,
)

__all__ = [
    # Profile schemas
    "ProfileUpdate",
    "ProfileResponse",
    "BMIResponse",
    # Health metric schemas
    "StepsUpdate",
    "HeartRateUpdate",
    "BloodPressureUpdate",
    "HealthMetricResponse",
    # Recommendation schemas
    "WalkingRecommendationResponse",
    "ReadingStatusResponse",
    "StepProgressResponse",
    "AssessmentResponse",
    # Reference schemas
    "ExerciseResponse",
    "NutrientsResponse",
    "FoodResponse",
    "HeartTipResponse",
    "HeartRateReferenceResponse",
]
