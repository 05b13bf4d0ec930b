"""
Classification of the current heart-rate, blood-pressure and step readings.

Heart-rate bands (resting bpm):
    < 60        Low
    60 - 100    Normal
    101 - 120   Elevated
    > 120       High

Blood-pressure categories (mmHg), checked in order:
    Normal        systolic < 120 and diastolic < 80
    Elevated      systolic 120-129 and diastolic < 80
    High Stage 1  systolic 130-139 or diastolic 80-89
    High Stage 2  systolic >= 140 or diastolic >= 90
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from models import HealthMetric

DEFAULT_DAILY_STEP_GOAL = 10000


@dataclass(frozen=True)
class ReadingStatus:
    label: str
    level: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {"label": self.label, "level": self.level, "description": self.description}


@dataclass(frozen=True)
class StepProgress:
    steps: int
    goal: int
    percent: float
    goal_reached: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "steps": self.steps,
            "goal": self.goal,
            "percent": self.percent,
            "goalReached": self.goal_reached,
        }


@dataclass(frozen=True)
class VitalsAssessment:
    heart_rate: ReadingStatus
    blood_pressure: Optional[ReadingStatus]
    steps: StepProgress

    def to_dict(self) -> Dict[str, Any]:
        return {
            "heartRate": self.heart_rate.to_dict(),
            "bloodPressure": self.blood_pressure.to_dict() if self.blood_pressure else None,
            "steps": self.steps.to_dict(),
        }


def classify_heart_rate(bpm: int) -> ReadingStatus:
    if bpm < 60:
        return ReadingStatus("Low", "info", "Below normal resting range")
    if bpm <= 100:
        return ReadingStatus("Normal", "success", "Healthy resting range")
    if bpm <= 120:
        return ReadingStatus("Elevated", "warning", "Above normal resting range")
    return ReadingStatus("High", "danger", "Significantly elevated")


def classify_blood_pressure(systolic: Optional[int], diastolic: Optional[int]) -> Optional[ReadingStatus]:
    """Return the category of a reading, or None if either value is missing."""
    if systolic is None or diastolic is None:
        return None
    if systolic < 120 and diastolic < 80:
        return ReadingStatus("Normal", "success", "Healthy blood pressure")
    if 120 <= systolic <= 129 and diastolic < 80:
        return ReadingStatus("Elevated", "info", "Watch your numbers")
    if 130 <= systolic <= 139 or 80 <= diastolic <= 89:
        return ReadingStatus("High Stage 1", "warning", "Lifestyle changes needed")
    if systolic >= 140 or diastolic >= 90:
        return ReadingStatus("High Stage 2", "danger", "Consult a doctor")
    # Unreachable for integer readings; kept so every input has a label
    return ReadingStatus("Unknown", "secondary", "Invalid reading")


def step_progress(steps: int, goal: int = DEFAULT_DAILY_STEP_GOAL) -> StepProgress:
    """Progress towards a daily step goal as a percentage (not capped at 100)."""
    if goal <= 0:
        raise ValueError("Step goal must be positive")
    return StepProgress(
        steps=steps,
        goal=goal,
        percent=round(steps / goal * 100, 1),
        goal_reached=steps >= goal,
    )


def assess(metric: HealthMetric, step_goal: int = DEFAULT_DAILY_STEP_GOAL) -> VitalsAssessment:
    return VitalsAssessment(
        heart_rate=classify_heart_rate(metric.heart_rate),
        blood_pressure=classify_blood_pressure(metric.systolic_bp, metric.diastolic_bp),
        steps=step_progress(metric.steps, step_goal),
    )
