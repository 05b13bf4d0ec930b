"""
Health metrics router - the caller's current steps, heart rate and blood pressure.

Architecture:
    HTTP Request → Router (this file) → MetricsService → Repositories → Storage

Each POST overwrites one field of the caller's single current record and
returns the whole record. Ranges are enforced by MetricsService; a
rejected value yields 400 and leaves the record untouched.
"""
import logging

from fastapi import APIRouter, Depends

from schemas import (
    StepsUpdate,
    HeartRateUpdate,
    BloodPressureUpdate,
    HealthMetricResponse,
    AssessmentResponse,
)
from services import MetricsService, ProfileService
from core.client_identity import get_client_id
from core.dependencies import get_metrics_service, get_profile_service
from core.middleware import get_metrics_collector

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/health-metrics", tags=["Health Metrics"])


@router.get(
    "/today",
    response_model=HealthMetricResponse,
    summary="Current health metric",
    description="Returns the caller's latest record, or the defaults (0 steps, 72 bpm, "
                "120/80 mmHg) if none exists. Never creates a profile."
)
def read_today(
    client_id: str = Depends(get_client_id),
    metrics_service: MetricsService = Depends(get_metrics_service)
):
    return metrics_service.get_today_metrics(client_id).to_dict()


@router.post(
    "/steps",
    response_model=HealthMetricResponse,
    summary="Set today's steps",
    description="Overwrites the step count. 400 if steps is negative or not a whole number."
)
def update_steps(
    body: StepsUpdate,
    client_id: str = Depends(get_client_id),
    metrics_service: MetricsService = Depends(get_metrics_service)
):
    metric = metrics_service.update_steps(client_id, body.steps)
    get_metrics_collector().record_metric_update("steps")
    return metric.to_dict()


@router.post(
    "/heart-rate",
    response_model=HealthMetricResponse,
    summary="Set the current heart rate",
    description="Overwrites the heart rate. 400 outside 30-250 bpm."
)
def update_heart_rate(
    body: HeartRateUpdate,
    client_id: str = Depends(get_client_id),
    metrics_service: MetricsService = Depends(get_metrics_service)
):
    metric = metrics_service.update_heart_rate(client_id, body.heart_rate)
    get_metrics_collector().record_metric_update("heart_rate")
    return metric.to_dict()


@router.post(
    "/blood-pressure",
    response_model=HealthMetricResponse,
    summary="Set the current blood pressure",
    description="Overwrites both values. 400 if systolic is outside 70-200, diastolic outside "
                "40-130, or diastolic is not lower than systolic."
)
def update_blood_pressure(
    body: BloodPressureUpdate,
    client_id: str = Depends(get_client_id),
    metrics_service: MetricsService = Depends(get_metrics_service)
):
    metric = metrics_service.update_blood_pressure(client_id, body.systolic, body.diastolic)
    get_metrics_collector().record_metric_update("blood_pressure")
    return metric.to_dict()


@router.get(
    "/assessment",
    response_model=AssessmentResponse,
    summary="Classify the current health metric",
    description="Heart-rate status, blood-pressure category and progress towards the daily "
                "step goal of the caller's walking plan."
)
def read_assessment(
    client_id: str = Depends(get_client_id),
    metrics_service: MetricsService = Depends(get_metrics_service),
    profile_service: ProfileService = Depends(get_profile_service)
):
    goal = profile_service.get_walking_recommendation(client_id).daily_steps
    return metrics_service.get_assessment(client_id, step_goal=goal).to_dict()
