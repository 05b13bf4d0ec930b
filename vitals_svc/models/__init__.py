"""
Domain models for the vitals service.

This module contains internal dataclasses shared by repositories and services.
"""
from models.profile import Profile, Gender
from models.health_metric import HealthMetric
from models.recommendation import BMICategory, BMIResult, WalkingRecommendation

__all__ = [
    "Profile",
    "Gender",
    "HealthMetric",
    "BMICategory",
    "BMIResult",
    "WalkingRecommendation",
]
