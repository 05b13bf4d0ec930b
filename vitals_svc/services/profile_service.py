"""
Service layer for client profiles, BMI and walking recommendations.

Architecture:
    API Layer (routers) → ProfileService → ProfileRepository → Storage

Dependency Injection:
    ProfileService receives its repository via constructor injection.
    Use core.dependencies.get_profile_service() in routers with Depends().
"""
import logging
from typing import Any, Optional

from repositories import ProfileRepository
from models import Profile, Gender, BMIResult, WalkingRecommendation
from core.exceptions import ProfileNotFoundError, ValidationError
from services.bmi_service import compute_bmi, validate_body_measurements
from services.walking_service import recommend_walking
from services.client_locks import ClientLockRegistry
from services.validators import as_whole_number

logger = logging.getLogger(__name__)


def _validate_age(age: Any) -> int:
    value = as_whole_number(age)
    if value is None or value <= 0:
        raise ValidationError("Age must be a positive whole number", field="age", value=age)
    return value


def _validate_gender(gender: Any) -> Gender:
    try:
        return Gender(gender)
    except ValueError:
        allowed = ", ".join(g.value for g in Gender)
        raise ValidationError(f"Gender must be one of: {allowed}", field="gender", value=gender)


class ProfileService:
    """
    Business logic for the one-profile-per-client model.

    Handles profile reads and upserts, and derives BMI and walking
    recommendations from the stored measurements.
    """

    def __init__(
        self,
        profile_repository: ProfileRepository,
        client_locks: Optional[ClientLockRegistry] = None
    ):
        """
        Args:
            profile_repository: Repository for profile storage.
                Injected via core.dependencies.get_profile_service().
            client_locks: Registry shared with MetricsService so that a
                profile save and a first metric update for the same client
                cannot both insert the profile.
        """
        self._repo = profile_repository
        self._locks = client_locks if client_locks is not None else ClientLockRegistry()

    def get_profile(self, client_id: str) -> Profile:
        """
        Get a client's profile.

        Raises:
            ProfileNotFoundError: If the client has never saved or implicitly
                created a profile.
        """
        profile = self._repo.get_by_client_id(client_id)
        if profile is None:
            raise ProfileNotFoundError(client_id=client_id)
        return profile

    def ensure_profile(self, client_id: str) -> Profile:
        """Get the client's profile, creating the default one if needed."""
        with self._locks.hold(client_id):
            profile, created = self._repo.get_or_create(client_id)
        if created:
            logger.info("Default profile created", extra={"profile_id": profile.id})
        return profile

    def update_profile(
        self,
        client_id: str,
        height: Optional[float] = None,
        weight: Optional[float] = None,
        age: Optional[int] = None,
        gender: Optional[str] = None
    ) -> Profile:
        """
        Upsert a client's profile from a partial update.

        Fields left as None keep the existing value, or the default value
        when the client has no profile yet. The merged profile is validated
        before anything is written.

        Returns:
            Profile: The stored profile.

        Raises:
            ValidationError: If a merged field is out of range.
        """
        with self._locks.hold(client_id):
            existing = self._repo.get_by_client_id(client_id)
            base = existing or Profile.default(client_id)

            merged = Profile(
                client_id=client_id,
                height=height if height is not None else base.height,
                weight=weight if weight is not None else base.weight,
                age=age if age is not None else base.age,
                gender=gender if gender is not None else base.gender,
            )
            validate_body_measurements(merged.height, merged.weight)
            merged.age = _validate_age(merged.age)
            merged.gender = _validate_gender(merged.gender)
            merged.height = float(merged.height)
            merged.weight = float(merged.weight)

            if existing is None:
                logger.info("Creating profile from update")
                return self._repo.add(merged)

            logger.info("Updating profile", extra={"profile_id": existing.id})
            return self._repo.update(merged)

    def get_bmi(self, client_id: str) -> BMIResult:
        """
        Compute the BMI result for the client's current profile.

        Raises:
            ProfileNotFoundError: If the client has no profile.
        """
        profile = self._repo.get_by_client_id(client_id)
        if profile is None:
            raise ProfileNotFoundError(
                client_id=client_id,
                detail="Profile not found. Please enter your height and weight."
            )
        validate_body_measurements(profile.height, profile.weight)
        return compute_bmi(profile.height, profile.weight)

    def get_walking_recommendation(self, client_id: str) -> WalkingRecommendation:
        """Walking plan for the client's BMI category, or the default plan."""
        profile = self._repo.get_by_client_id(client_id)
        if profile is None:
            return recommend_walking(None)
        validate_body_measurements(profile.height, profile.weight)
        return recommend_walking(compute_bmi(profile.height, profile.weight).category)
