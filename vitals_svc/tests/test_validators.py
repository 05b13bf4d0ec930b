"""
Tests for the numeric coercion helpers shared by the services.
"""
import math

import pytest

from services.validators import as_finite_number, as_whole_number


class TestAsWholeNumber:

    @pytest.mark.parametrize("value, expected", [
        (5000, 5000),
        (5000.0, 5000),
        (0, 0),
        (-3.0, -3),
    ])
    def test_accepts_integral_values(self, value, expected):
        result = as_whole_number(value)
        assert result == expected
        assert isinstance(result, int)

    @pytest.mark.parametrize("value", [10.5, math.nan, math.inf, "5", None, True])
    def test_rejects_other_values(self, value):
        assert as_whole_number(value) is None


class TestAsFiniteNumber:

    def test_converts_ints(self):
        assert as_finite_number(170) == 170.0

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan, 10 ** 400, "170", False])
    def test_rejects_unusable_values(self, value):
        assert as_finite_number(value) is None
