"""
Pydantic schemas for profile and BMI API operations.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.types import JSONNumber


class ProfileUpdate(BaseModel):
    """Schema for saving a profile.

    Every field is optional; omitted fields keep their stored value, or the
    default value when the client has no profile yet. Ranges are checked by
    the service so that all invalid values share one error shape.
    """
    height: Optional[JSONNumber] = Field(None, description="Height in centimetres", examples=[172.5])
    weight: Optional[JSONNumber] = Field(None, description="Weight in kilograms", examples=[68.0])
    age: Optional[JSONNumber] = Field(None, description="Age in whole years", examples=[34])
    gender: Optional[str] = Field(None, description="male, female or other", examples=["female"])

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"height": 172.5, "weight": 68.0, "age": 34, "gender": "female"}
        }
    )


class ProfileResponse(BaseModel):
    """Schema for profile response."""
    height: float = Field(..., description="Height in centimetres", examples=[170.0])
    weight: float = Field(..., description="Weight in kilograms", examples=[70.0])
    age: int = Field(..., description="Age in whole years", examples=[30])
    gender: str = Field(..., description="male, female or other", examples=["other"])


class BMIResponse(BaseModel):
    """Schema for the BMI result computed from the stored profile."""
    bmi: float = Field(..., description="Body mass index, kg/m²", examples=[24.22])
    category: str = Field(..., description="underweight, normal, overweight or obese", examples=["normal"])
    recommendation: str = Field(..., description="Guidance for the category")
