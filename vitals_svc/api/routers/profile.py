"""
Profile router - profile read/update and BMI.

Architecture:
    HTTP Request → Router (this file) → ProfileService → ProfileRepository → Storage

The caller is identified by core.client_identity.get_client_id; there are
no accounts. Handlers are plain ``def`` so FastAPI runs them in its
threadpool and blocking storage calls never stall the event loop.
"""
import logging

from fastapi import APIRouter, Depends

from schemas import ProfileUpdate, ProfileResponse, BMIResponse
from services import ProfileService
from core.client_identity import get_client_id
from core.dependencies import get_profile_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Profile"])


@router.get(
    "/profile",
    response_model=ProfileResponse,
    summary="Get the caller's profile",
    description="Returns height, weight, age and gender. 404 if the caller has never saved a profile."
)
def read_profile(
    client_id: str = Depends(get_client_id),
    profile_service: ProfileService = Depends(get_profile_service)
):
    return profile_service.get_profile(client_id).to_dict()


@router.post(
    "/profile",
    response_model=ProfileResponse,
    summary="Save the caller's profile",
    description="Partial upsert. Omitted fields keep their stored value, or the defaults "
                "(170 cm, 70 kg, 30 years, other) for a new profile. 400 on invalid values."
)
def save_profile(
    body: ProfileUpdate,
    client_id: str = Depends(get_client_id),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """
    Save the profile.

    - **height**: centimetres, greater than zero
    - **weight**: kilograms, greater than zero
    - **age**: whole years, greater than zero
    - **gender**: male, female or other
    """
    profile = profile_service.update_profile(
        client_id,
        height=body.height,
        weight=body.weight,
        age=body.age,
        gender=body.gender,
    )
    return profile.to_dict()


@router.get(
    "/bmi",
    response_model=BMIResponse,
    summary="BMI for the caller's profile",
    description="Computed from the stored height and weight on every request. 404 if no profile exists."
)
def read_bmi(
    client_id: str = Depends(get_client_id),
    profile_service: ProfileService = Depends(get_profile_service)
):
    return profile_service.get_bmi(client_id).to_dict()
