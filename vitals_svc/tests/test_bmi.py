"""
Unit tests for the BMI engine.

Tests cover:
- compute_bmi: value, category and recommendation text
- classify_bmi: threshold boundaries
- validate_body_measurements: rejection of unusable inputs
"""
import math

import pytest

from core.exceptions import ValidationError
from models import BMICategory
from services.bmi_service import (
    BMI_RECOMMENDATIONS,
    classify_bmi,
    compute_bmi,
    validate_body_measurements,
)


class TestComputeBMI:

    def test_normal_weight(self):
        result = compute_bmi(170, 70)
        assert result.bmi == pytest.approx(24.22, abs=0.01)
        assert result.category == BMICategory.NORMAL
        assert result.recommendation.startswith("You're at a healthy weight!")

    def test_underweight(self):
        result = compute_bmi(160, 45)
        assert result.bmi == pytest.approx(17.58, abs=0.01)
        assert result.category == BMICategory.UNDERWEIGHT

    def test_overweight(self):
        result = compute_bmi(175, 80)
        assert result.bmi == pytest.approx(26.12, abs=0.01)
        assert result.category == BMICategory.OVERWEIGHT

    def test_obese(self):
        result = compute_bmi(180, 100)
        assert result.bmi == pytest.approx(30.86, abs=0.01)
        assert result.category == BMICategory.OBESE
        assert "1-2 pounds per week" in result.recommendation

    def test_deterministic(self):
        assert compute_bmi(182.5, 77.3) == compute_bmi(182.5, 77.3)

    def test_value_is_not_rounded(self):
        result = compute_bmi(170, 70)
        assert result.bmi == 70 / (1.7 * 1.7)

    def test_recommendation_matches_category(self):
        for height, weight in [(160, 45), (170, 70), (175, 80), (180, 100)]:
            result = compute_bmi(height, weight)
            assert result.recommendation == BMI_RECOMMENDATIONS[result.category]

    def test_to_dict_uses_category_value(self):
        data = compute_bmi(170, 70).to_dict()
        assert data["category"] == "normal"
        assert set(data) == {"bmi", "category", "recommendation"}


class TestClassifyBMI:

    @pytest.mark.parametrize("bmi, expected", [
        (18.49, BMICategory.UNDERWEIGHT),
        (18.5, BMICategory.NORMAL),
        (24.99, BMICategory.NORMAL),
        (25.0, BMICategory.OVERWEIGHT),
        (29.99, BMICategory.OVERWEIGHT),
        (30.0, BMICategory.OBESE),
        (55.0, BMICategory.OBESE),
    ])
    def test_boundaries_go_to_higher_category(self, bmi, expected):
        assert classify_bmi(bmi) == expected

    def test_exact_boundary_from_measurements(self):
        # 100 cm makes BMI equal to the weight
        assert compute_bmi(100, 18.5).category == BMICategory.NORMAL
        assert compute_bmi(100, 25).category == BMICategory.OVERWEIGHT
        assert compute_bmi(100, 30).category == BMICategory.OBESE


class TestValidateBodyMeasurements:

    def test_accepts_positive_numbers(self):
        validate_body_measurements(170, 70.5)

    @pytest.mark.parametrize("height, weight", [
        (0, 70),
        (-170, 70),
        (170, 0),
        (170, -1),
        (math.inf, 70),
        (170, math.nan),
    ])
    def test_rejects_non_positive_or_non_finite(self, height, weight):
        with pytest.raises(ValidationError):
            validate_body_measurements(height, weight)

    def test_rejects_non_numbers(self):
        with pytest.raises(ValidationError):
            validate_body_measurements("170", 70)
        with pytest.raises(ValidationError):
            validate_body_measurements(True, 70)

    def test_error_names_the_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_body_measurements(170, 0)
        assert exc_info.value.context["field"] == "weight"
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("height, weight", [
        (1e-200, 70),    # squared height underflows to 0
        (1, 1e308),      # quotient overflows to inf
        (1e200, 1e-200), # squared height overflows, BMI becomes 0
        (10 ** 400, 70), # too large for a float
    ])
    def test_rejects_measurements_without_usable_bmi(self, height, weight):
        with pytest.raises(ValidationError):
            validate_body_measurements(height, weight)

    def test_accepted_measurements_give_finite_bmi(self):
        for height, weight in [(0.5, 0.1), (300, 500), (1, 1e-3)]:
            validate_body_measurements(height, weight)
            bmi = compute_bmi(height, weight).bmi
            assert math.isfinite(bmi) and bmi > 0
