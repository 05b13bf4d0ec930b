"""
BMI engine.

BMI = weight_kg / (height_m)^2, classified with half-open intervals whose
lower bound is inclusive:

    bmi < 18.5          underweight
    18.5 <= bmi < 25    normal
    25 <= bmi < 30      overweight
    bmi >= 30           obese

compute_bmi() is pure and performs no input checks; callers validate
measurements with validate_body_measurements() first.
"""
import math
from typing import Dict, List, Tuple

from core.exceptions import ValidationError
from models import BMICategory, BMIResult
from services.validators import as_finite_number

# Upper bound (exclusive) of each category, in ascending order; obese is open-ended
BMI_THRESHOLDS: List[Tuple[float, BMICategory]] = [
    (18.5, BMICategory.UNDERWEIGHT),
    (25.0, BMICategory.NORMAL),
    (30.0, BMICategory.OVERWEIGHT),
]

BMI_RECOMMENDATIONS: Dict[BMICategory, str] = {
    BMICategory.UNDERWEIGHT: (
        "You may be underweight. Consider consulting a healthcare provider or nutritionist "
        "to develop a healthy weight gain plan with nutrient-rich foods and appropriate exercise."
    ),
    BMICategory.NORMAL: (
        "You're at a healthy weight! Maintain it through a balanced diet rich in fruits, "
        "vegetables, whole grains, and regular physical activity (150 minutes of moderate "
        "exercise weekly)."
    ),
    BMICategory.OVERWEIGHT: (
        "You're in the overweight range. Focus on portion control, increase physical activity "
        "to 200-300 minutes weekly, and choose whole foods over processed options. Small, "
        "sustainable changes work best."
    ),
    BMICategory.OBESE: (
        "Your BMI indicates obesity, which increases health risks. Consult with healthcare "
        "professionals for a comprehensive plan including nutrition counseling, structured "
        "exercise, and possibly medical support. Aim for gradual, sustainable weight loss of "
        "1-2 pounds per week."
    ),
}


def validate_body_measurements(height_cm: float, weight_kg: float) -> None:
    """
    Reject measurements compute_bmi() cannot handle.

    Besides the per-field checks, the resulting BMI itself must be a finite
    positive number: a tiny height can underflow the squared height to 0
    and a huge weight can overflow the quotient to inf.

    Raises:
        ValidationError: If height or weight is not a finite positive number,
            or they do not yield a usable BMI.
    """
    numbers = {}
    for name, value in (("height", height_cm), ("weight", weight_kg)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(f"{name.capitalize()} must be a number", field=name)
        number = as_finite_number(value)
        if number is None or number <= 0:
            raise ValidationError(f"{name.capitalize()} must be a positive number", field=name, value=value)
        numbers[name] = number

    height_m = numbers["height"] / 100
    squared = height_m * height_m
    if squared == 0:
        raise ValidationError("Height is too small to compute a BMI", field="height", value=height_cm)

    bmi = numbers["weight"] / squared
    if not math.isfinite(bmi) or bmi <= 0:
        raise ValidationError(
            "Height and weight do not give a valid BMI",
            height=height_cm,
            weight=weight_kg
        )


def classify_bmi(bmi: float) -> BMICategory:
    """Map a BMI value to its category; boundary values go to the higher category."""
    for upper, category in BMI_THRESHOLDS:
        if bmi < upper:
            return category
    return BMICategory.OBESE


def compute_bmi(height_cm: float, weight_kg: float) -> BMIResult:
    """
    Compute BMI, its category and the matching recommendation.

    Args:
        height_cm: Height in centimetres (> 0).
        weight_kg: Weight in kilograms (> 0).

    Returns:
        BMIResult with the unrounded BMI value.

    Example:
        >>> compute_bmi(170, 70).category
        <BMICategory.NORMAL: 'normal'>
    """
    height_m = height_cm / 100
    bmi = weight_kg / (height_m * height_m)
    category = classify_bmi(bmi)
    return BMIResult(
        bmi=bmi,
        category=category,
        recommendation=BMI_RECOMMENDATIONS[category],
    )
