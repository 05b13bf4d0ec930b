"""
API routers module.

This module contains all API route definitions organized by domain.
"""
from api.routers.health import router as health_router
from api.routers.profile import router as profile_router
from api.routers.metrics import router as metrics_router
from api.routers.recommendations import router as recommendations_router
from api.routers.reference import router as reference_router

__all__ = [
    "health_router",
    "profile_router",
    "metrics_router",
    "recommendations_router",
    "reference_router",
]
