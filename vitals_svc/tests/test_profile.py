"""
Tests for ProfileService: profile upsert, BMI and walking plan lookup.
"""
import pytest

from core.exceptions import ProfileNotFoundError, ValidationError
from models import BMICategory, Gender
from services.walking_service import DEFAULT_WALKING_RECOMMENDATION


class TestGetProfile:

    def test_missing_profile_raises(self, profile_service):
        with pytest.raises(ProfileNotFoundError) as exc_info:
            profile_service.get_profile("nobody")
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Profile not found"

    def test_ensure_profile_creates_defaults_once(self, profile_service):
        first = profile_service.ensure_profile("client-1")
        second = profile_service.ensure_profile("client-1")
        assert first.id == second.id
        assert (first.height, first.weight, first.age, first.gender) == (170.0, 70.0, 30, Gender.OTHER)


class TestUpdateProfile:

    def test_partial_update_on_new_client_uses_defaults(self, profile_service):
        profile = profile_service.update_profile("client-1", height=182)
        assert (profile.height, profile.weight, profile.age, profile.gender) == (182.0, 70.0, 30, Gender.OTHER)

    def test_partial_update_keeps_existing_values(self, profile_service):
        profile_service.update_profile("client-1", height=160, weight=55, age=41, gender="female")
        profile = profile_service.update_profile("client-1", weight=57.5)
        assert (profile.height, profile.weight, profile.age, profile.gender) == (160.0, 57.5, 41, Gender.FEMALE)

    def test_update_refreshes_updated_at_only(self, profile_service):
        created = profile_service.update_profile("client-1", age=20)
        updated = profile_service.update_profile("client-1", age=21)
        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert updated.updated_at >= created.updated_at

    @pytest.mark.parametrize("fields", [
        {"height": 0},
        {"weight": -3},
        {"age": 0},
        {"age": 30.5},
        {"height": 1e-200},
        {"height": 1, "weight": 1e308},
        {"gender": "unknown"},
    ])
    def test_invalid_values_rejected_without_write(self, profile_service, fields):
        with pytest.raises(ValidationError):
            profile_service.update_profile("client-1", **fields)
        with pytest.raises(ProfileNotFoundError):
            profile_service.get_profile("client-1")

    def test_whole_float_age_stored_as_int(self, profile_service):
        profile = profile_service.update_profile("client-1", age=42.0)
        assert profile.age == 42
        assert isinstance(profile.age, int)

    def test_invalid_update_leaves_existing_profile(self, profile_service):
        profile_service.update_profile("client-1", height=175, weight=72)
        with pytest.raises(ValidationError):
            profile_service.update_profile("client-1", weight=0)
        assert profile_service.get_profile("client-1").weight == 72.0


class TestBMIAndWalking:

    def test_bmi_requires_profile(self, profile_service):
        with pytest.raises(ProfileNotFoundError) as exc_info:
            profile_service.get_bmi("client-1")
        assert exc_info.value.detail == "Profile not found. Please enter your height and weight."

    def test_bmi_from_stored_profile(self, profile_service):
        profile_service.update_profile("client-1", height=180, weight=100)
        result = profile_service.get_bmi("client-1")
        assert result.category == BMICategory.OBESE
        assert result.bmi == pytest.approx(30.86, abs=0.01)

    def test_bmi_recomputed_after_update(self, profile_service):
        profile_service.update_profile("client-1", height=170, weight=70)
        assert profile_service.get_bmi("client-1").category == BMICategory.NORMAL
        profile_service.update_profile("client-1", weight=45)
        assert profile_service.get_bmi("client-1").category == BMICategory.UNDERWEIGHT

    def test_walking_default_without_profile(self, profile_service):
        assert profile_service.get_walking_recommendation("client-1") == DEFAULT_WALKING_RECOMMENDATION

    def test_walking_follows_bmi_category(self, profile_service):
        profile_service.update_profile("client-1", height=180, weight=100)
        plan = profile_service.get_walking_recommendation("client-1")
        assert plan.daily_steps == 8000
        assert len(plan.tips) == 5
