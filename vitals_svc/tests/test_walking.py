"""
Unit tests for the walking recommendation engine.
"""
import dataclasses

import pytest

from models import BMICategory
from services.walking_service import (
    DEFAULT_WALKING_RECOMMENDATION,
    WALKING_RECOMMENDATIONS,
    recommend_walking,
)


class TestRecommendWalking:

    def test_no_category_returns_default_bundle(self):
        plan = recommend_walking(None)
        assert plan is DEFAULT_WALKING_RECOMMENDATION
        assert plan.daily_steps == 10000
        assert plan.duration == "30-45 minutes"
        assert plan.intensity == "Moderate pace"
        assert plan.tips == (
            "Start with 5-10 minutes if you're new to walking",
            "Walk at a pace where you can talk but not sing",
            "Gradually increase your duration each week",
            "Stay hydrated before, during, and after walking",
        )

    def test_obese_bundle(self):
        plan = recommend_walking(BMICategory.OBESE)
        assert plan.daily_steps == 8000
        assert plan.duration == "30-40 minutes"
        assert plan.intensity == "Start slow, build gradually"
        assert len(plan.tips) == 5

    @pytest.mark.parametrize("category, steps", [
        (BMICategory.UNDERWEIGHT, 7000),
        (BMICategory.NORMAL, 10000),
        (BMICategory.OVERWEIGHT, 12000),
        (BMICategory.OBESE, 8000),
    ])
    def test_daily_steps_per_category(self, category, steps):
        assert recommend_walking(category).daily_steps == steps

    def test_accepts_category_value_string(self):
        assert recommend_walking("overweight") == WALKING_RECOMMENDATIONS[BMICategory.OVERWEIGHT]

    def test_every_bundle_has_three_to_five_tips(self):
        for plan in WALKING_RECOMMENDATIONS.values():
            assert 3 <= len(plan.tips) <= 5

    def test_bundles_are_immutable(self):
        plan = recommend_walking(BMICategory.NORMAL)
        with pytest.raises(dataclasses.FrozenInstanceError):
            plan.daily_steps = 1

    def test_to_dict_is_camel_case(self):
        data = recommend_walking(BMICategory.UNDERWEIGHT).to_dict()
        assert data["dailySteps"] == 7000
        assert isinstance(data["tips"], list)
        assert data["tips"][0] == "Focus on building strength alongside walking"
