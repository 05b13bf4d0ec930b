"""
Derived (never persisted) results of the BMI and walking engines.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class BMICategory(str, Enum):
    """Weight categories ordered by increasing BMI."""
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


@dataclass(frozen=True)
class BMIResult:
    bmi: float
    category: BMICategory
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bmi": self.bmi,
            "category": self.category.value,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class WalkingRecommendation:
    daily_steps: int
    duration: str
    intensity: str
    tips: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dailySteps": self.daily_steps,
            "duration": self.duration,
            "intensity": self.intensity,
            "tips": list(self.tips),
        }
