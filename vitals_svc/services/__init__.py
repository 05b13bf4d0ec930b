"""
Service layer for business logic.

Pure engines (no storage):
- services.bmi_service: BMI computation and classification
- services.walking_service: walking plan lookup by BMI category
- services.vitals_assessment: heart-rate, blood-pressure and step-goal labels

Stateful services (injected via core.dependencies):
- ProfileService, MetricsService, ReferenceService
"""
from services.bmi_service import compute_bmi, classify_bmi, validate_body_measurements
from services.walking_service import recommend_walking, DEFAULT_WALKING_RECOMMENDATION
from services.client_locks import ClientLockRegistry
from services.profile_service import ProfileService
from services.metrics_service import MetricsService
from services.reference_service import ReferenceService

__all__ = [
    "compute_bmi",
    "classify_bmi",
    "validate_body_measurements",
    "recommend_walking",
    "DEFAULT_WALKING_RECOMMENDATION",
    "ClientLockRegistry",
    "ProfileService",
    "MetricsService",
    "ReferenceService",
]
