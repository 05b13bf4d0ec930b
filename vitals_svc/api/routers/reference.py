"""
Reference router - read-only catalogs of exercises, foods, heart tips and
age-banded heart-rate ranges.

These endpoints do not identify the caller and touch no storage.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from schemas import (
    ExerciseResponse,
    FoodResponse,
    HeartTipResponse,
    HeartRateReferenceResponse,
)
from services import ReferenceService
from core.dependencies import get_reference_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Reference"])


@router.get(
    "/exercises",
    response_model=List[ExerciseResponse],
    summary="List exercises",
)
async def list_exercises(
    category: Optional[str] = Query(None, description="cardio, strength, flexibility or balance"),
    intensity: Optional[str] = Query(None, description="low, moderate or high"),
    reference_service: ReferenceService = Depends(get_reference_service)
):
    return [e.to_dict() for e in reference_service.list_exercises(category=category, intensity=intensity)]


@router.get(
    "/foods",
    response_model=List[FoodResponse],
    summary="List heart-healthy foods",
)
async def list_foods(
    category: Optional[str] = Query(None, description="fruits, vegetables, proteins, grains, dairy or nuts"),
    reference_service: ReferenceService = Depends(get_reference_service)
):
    return [f.to_dict() for f in reference_service.list_foods(category=category)]


@router.get(
    "/heart-tips",
    response_model=List[HeartTipResponse],
    summary="List heart-health tips",
)
async def list_heart_tips(
    category: Optional[str] = Query(None, description="walking, exercise, diet, monitoring or lifestyle"),
    importance: Optional[str] = Query(None, description="critical, important or helpful"),
    reference_service: ReferenceService = Depends(get_reference_service)
):
    return [t.to_dict() for t in reference_service.list_heart_tips(category=category, importance=importance)]


@router.get(
    "/heart-rate-references",
    response_model=List[HeartRateReferenceResponse],
    summary="Heart-rate ranges by age group",
)
async def list_heart_rate_references(
    reference_service: ReferenceService = Depends(get_reference_service)
):
    return [r.to_dict() for r in reference_service.list_heart_rate_references()]


@router.get(
    "/heart-rate-references/for-age",
    response_model=HeartRateReferenceResponse,
    summary="Heart-rate range for an age",
    description="Returns the band covering the given age in years."
)
async def heart_rate_reference_for_age(
    age: float = Query(..., ge=0, description="Age in years"),
    reference_service: ReferenceService = Depends(get_reference_service)
):
    return reference_service.heart_rate_reference_for_age(age).to_dict()
