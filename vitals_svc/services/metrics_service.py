"""
Service layer for the per-client current health metric.

Every update follows the same upsert-by-latest shape: resolve (or create)
the client's profile, read the latest metric, change only the targeted
field(s) and write the record back with a fresh date. A client without a
metric gets a new record seeded with defaults. History is never kept.

Architecture:
    API Layer (routers) → MetricsService → Repositories → Storage

Dependency Injection:
    MetricsService receives its repositories and the lock registry via
    constructor injection. Use core.dependencies.get_metrics_service().
"""
import logging
from typing import Any, Callable, Optional, Tuple

from repositories import ProfileRepository, HealthMetricRepository
from models import HealthMetric
from core.datetime_utils import utc_now
from core.exceptions import ValidationError
from services.client_locks import ClientLockRegistry
from services.validators import as_whole_number
from services.vitals_assessment import VitalsAssessment, assess, DEFAULT_DAILY_STEP_GOAL

logger = logging.getLogger(__name__)

HEART_RATE_RANGE = (30, 250)
SYSTOLIC_RANGE = (70, 200)
DIASTOLIC_RANGE = (40, 130)


def validate_steps(steps: Any) -> int:
    value = as_whole_number(steps)
    if value is None or value < 0:
        raise ValidationError("Invalid steps value", field="steps", value=steps)
    return value


def validate_heart_rate(heart_rate: Any) -> int:
    low, high = HEART_RATE_RANGE
    value = as_whole_number(heart_rate)
    if value is None or not low <= value <= high:
        raise ValidationError(
            "Invalid heart rate value",
            field="heartRate",
            value=heart_rate,
            allowed=f"{low}-{high}"
        )
    return value


def validate_blood_pressure(systolic: Any, diastolic: Any) -> Tuple[int, int]:
    sys_low, sys_high = SYSTOLIC_RANGE
    dia_low, dia_high = DIASTOLIC_RANGE
    sys_value = as_whole_number(systolic)
    dia_value = as_whole_number(diastolic)
    if (
        sys_value is None
        or dia_value is None
        or not sys_low <= sys_value <= sys_high
        or not dia_low <= dia_value <= dia_high
    ):
        raise ValidationError(
            "Invalid blood pressure values",
            systolic=systolic,
            diastolic=diastolic
        )
    if dia_value >= sys_value:
        raise ValidationError(
            "Invalid blood pressure values: diastolic must be lower than systolic",
            systolic=systolic,
            diastolic=diastolic
        )
    return sys_value, dia_value


class MetricsService:
    """
    Business logic for the steps / heart-rate / blood-pressure upserts.

    Input is validated before any read or write, so a rejected update
    leaves storage untouched.
    """

    def __init__(
        self,
        profile_repository: ProfileRepository,
        health_metric_repository: HealthMetricRepository,
        client_locks: ClientLockRegistry
    ):
        """
        Args:
            profile_repository: Resolves the owning profile, creating it on first access.
            health_metric_repository: Reads and writes the current metric.
            client_locks: Shared registry serializing updates per client id.
        """
        self._profile_repo = profile_repository
        self._metric_repo = health_metric_repository
        self._locks = client_locks

    def _owner_id(self, client_id: str) -> int:
        profile, created = self._profile_repo.get_or_create(client_id)
        if created:
            logger.info("Default profile created for metrics", extra={"profile_id": profile.id})
        return profile.id

    def _upsert(self, client_id: str, apply: Callable[[HealthMetric], None], what: str) -> HealthMetric:
        with self._locks.hold(client_id):
            profile_id = self._owner_id(client_id)
            metric = self._metric_repo.get_latest(profile_id)

            if metric is None:
                metric = HealthMetric(profile_id=profile_id)
                apply(metric)
                metric.date = utc_now()
                metric = self._metric_repo.add(metric)
                logger.info(f"Metric record created with {what}", extra={"metric_id": metric.id})
                return metric

            apply(metric)
            metric.date = utc_now()
            metric = self._metric_repo.update(metric)
            logger.info(f"Metric {what} updated", extra={"metric_id": metric.id})
            return metric

    def get_today_metrics(self, client_id: str) -> HealthMetric:
        """
        Get the client's current metric.

        Reading never creates a profile. A client with a profile but no
        metric gets the default record persisted; a client without a
        profile gets unsaved defaults (``id`` is None).

        Returns:
            HealthMetric: The latest record for the client.
        """
        with self._locks.hold(client_id):
            profile = self._profile_repo.get_by_client_id(client_id)
            if profile is None:
                return HealthMetric(date=utc_now())

            metric = self._metric_repo.get_latest(profile.id)
            if metric is not None:
                return metric

            metric = self._metric_repo.add(HealthMetric(profile_id=profile.id, date=utc_now()))
            logger.info("Default metric record created", extra={"metric_id": metric.id})
            return metric

    def update_steps(self, client_id: str, steps: int) -> HealthMetric:
        """
        Overwrite the step count of the client's current metric.

        Raises:
            ValidationError: If steps is not a non-negative integer.
        """
        steps = validate_steps(steps)

        def apply(metric: HealthMetric) -> None:
            metric.steps = steps

        return self._upsert(client_id, apply, "steps")

    def update_heart_rate(self, client_id: str, heart_rate: int) -> HealthMetric:
        """
        Overwrite the heart rate of the client's current metric.

        Raises:
            ValidationError: If heart_rate is not an integer in [30, 250].
        """
        heart_rate = validate_heart_rate(heart_rate)

        def apply(metric: HealthMetric) -> None:
            metric.heart_rate = heart_rate

        return self._upsert(client_id, apply, "heart rate")

    def update_blood_pressure(self, client_id: str, systolic: int, diastolic: int) -> HealthMetric:
        """
        Overwrite both blood-pressure values of the client's current metric.

        Raises:
            ValidationError: If either value is out of range, or diastolic
                is not lower than systolic.
        """
        systolic, diastolic = validate_blood_pressure(systolic, diastolic)

        def apply(metric: HealthMetric) -> None:
            metric.systolic_bp = systolic
            metric.diastolic_bp = diastolic

        return self._upsert(client_id, apply, "blood pressure")

    def get_assessment(self, client_id: str, step_goal: Optional[int] = None) -> VitalsAssessment:
        """Classify the client's current metric against the given daily step goal."""
        metric = self.get_today_metrics(client_id)
        return assess(metric, step_goal or DEFAULT_DAILY_STEP_GOAL)
