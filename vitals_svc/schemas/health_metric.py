"""
Pydantic schemas for health metric API operations.

Field names on the wire are camelCase (``heartRate``, ``systolicBP``);
the models accept either spelling on input.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.types import JSONNumber


class StepsUpdate(BaseModel):
    """Schema for overwriting today's step count."""
    steps: JSONNumber = Field(..., description="Step count, zero or more", examples=[5000])


class HeartRateUpdate(BaseModel):
    """Schema for overwriting the current heart rate."""
    heart_rate: JSONNumber = Field(..., alias="heartRate", description="Beats per minute, 30-250", examples=[72])

    model_config = ConfigDict(populate_by_name=True)


class BloodPressureUpdate(BaseModel):
    """Schema for overwriting the current blood pressure.

    Systolic must be 70-200 mmHg, diastolic 40-130 mmHg, and diastolic
    lower than systolic.
    """
    systolic: JSONNumber = Field(..., description="Systolic pressure in mmHg", examples=[118])
    diastolic: JSONNumber = Field(..., description="Diastolic pressure in mmHg", examples=[76])


class HealthMetricResponse(BaseModel):
    """Schema for the client's current health metric."""
    steps: int = Field(..., examples=[5000])
    heart_rate: int = Field(..., alias="heartRate", examples=[72])
    systolic_bp: Optional[int] = Field(None, alias="systolicBP", examples=[120])
    diastolic_bp: Optional[int] = Field(None, alias="diastolicBP", examples=[80])
    date: str = Field(..., description="ISO 8601 UTC timestamp of the last write", examples=["2025-01-01T10:00:00Z"])

    model_config = ConfigDict(populate_by_name=True)
