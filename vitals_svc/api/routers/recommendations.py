"""
Recommendations router - walking plan derived from the caller's BMI.
"""
import logging

from fastapi import APIRouter, Depends

from schemas import WalkingRecommendationResponse
from services import ProfileService
from core.client_identity import get_client_id
from core.dependencies import get_profile_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Recommendations"])


@router.get(
    "/walking-recommendation",
    response_model=WalkingRecommendationResponse,
    summary="Walking plan",
    description="Daily steps, duration, intensity and tips for the caller's BMI category. "
                "Callers without a profile get the general plan."
)
def read_walking_recommendation(
    client_id: str = Depends(get_client_id),
    profile_service: ProfileService = Depends(get_profile_service)
):
    return profile_service.get_walking_recommendation(client_id).to_dict()
