"""
Walking recommendation engine: a fixed lookup from BMI category to a
daily walking plan.
"""
from typing import Dict, Optional

from models import BMICategory, WalkingRecommendation

# Returned when the client has no profile to derive a category from
DEFAULT_WALKING_RECOMMENDATION = WalkingRecommendation(
    daily_steps=10000,
    duration="30-45 minutes",
    intensity="Moderate pace",
    tips=(
        "Start with 5-10 minutes if you're new to walking",
        "Walk at a pace where you can talk but not sing",
        "Gradually increase your duration each week",
        "Stay hydrated before, during, and after walking",
    ),
)

WALKING_RECOMMENDATIONS: Dict[BMICategory, WalkingRecommendation] = {
    BMICategory.UNDERWEIGHT: WalkingRecommendation(
        daily_steps=7000,
        duration="20-30 minutes",
        intensity="Light to moderate",
        tips=(
            "Focus on building strength alongside walking",
            "Ensure adequate nutrition to support activity",
            "Don't overexert - rest is important for recovery",
            "Consider resistance training 2-3 times per week",
        ),
    ),
    BMICategory.NORMAL: WalkingRecommendation(
        daily_steps=10000,
        duration="30-45 minutes",
        intensity="Moderate pace",
        tips=(
            "Maintain your healthy habits",
            "Vary your routes to keep it interesting",
            "Try interval walking for extra benefits",
            "Include some hills for added challenge",
        ),
    ),
    BMICategory.OVERWEIGHT: WalkingRecommendation(
        daily_steps=12000,
        duration="45-60 minutes",
        intensity="Moderate to brisk",
        tips=(
            "Break walks into 2-3 sessions if needed",
            "Focus on consistency over intensity",
            "Combine with dietary changes for best results",
            "Track your progress to stay motivated",
        ),
    ),
    BMICategory.OBESE: WalkingRecommendation(
        daily_steps=8000,
        duration="30-40 minutes",
        intensity="Start slow, build gradually",
        tips=(
            "Begin with 10-minute walks, 3 times daily",
            "Choose comfortable, supportive shoes",
            "Walk on flat, even surfaces initially",
            "Consult your doctor before starting",
            "Listen to your body and rest when needed",
        ),
    ),
}


def recommend_walking(category: Optional[BMICategory]) -> WalkingRecommendation:
    """
    Pick the walking plan for a BMI category.

    Args:
        category: The client's BMI category, or None when no profile exists.

    Returns:
        The category's bundle, or DEFAULT_WALKING_RECOMMENDATION for None.
    """
    if category is None:
        return DEFAULT_WALKING_RECOMMENDATION
    return WALKING_RECOMMENDATIONS[BMICategory(category)]
