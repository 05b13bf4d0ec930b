"""
FastAPI application entry point for the Vitals Service API.

This module configures and creates the FastAPI application with:
- Structured JSON Logging: Request/response logging with request and client ids
- Dependency Injection: Services and repositories injected via Depends()
- Exception Handling: Consistent error responses via setup_exception_handlers()
- CORS Middleware: Origins from VITALS_SVC_CORS_ORIGINS
- Lifespan Management: Storage initialization
- Metrics Collection: In-memory metrics for Prometheus scraping

Architecture Overview:
    ┌─────────────────────────────────────────────────────────────┐
    │                     FastAPI Application                      │
    ├─────────────────────────────────────────────────────────────┤
    │  Middleware Stack (order matters!)                          │
    │    ├── LoggingMiddleware  - Request logging & metrics       │
    │    └── CORSMiddleware     - Cross-origin support            │
    ├─────────────────────────────────────────────────────────────┤
    │  Routers (api/routers/)                                     │
    │    ├── health.py          - /health, /ready, /metrics       │
    │    ├── profile.py         - /api/profile, /api/bmi          │
    │    ├── metrics.py         - /api/health-metrics/*           │
    │    ├── recommendations.py - /api/walking-recommendation     │
    │    └── reference.py       - /api/exercises, foods, tips     │
    ├─────────────────────────────────────────────────────────────┤
    │  Services (services/)     ← Injected via Depends()          │
    │    ├── ProfileService     - Profile upsert, BMI, walking    │
    │    ├── MetricsService     - Current metric upserts          │
    │    └── ReferenceService   - Static catalog lookups          │
    ├─────────────────────────────────────────────────────────────┤
    │  Repositories (repositories/)   ← Injected into Services    │
    │    ├── ProfileRepository        - SQLite or in-memory       │
    │    └── HealthMetricRepository   - SQLite or in-memory       │
    └─────────────────────────────────────────────────────────────┘
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from core.config import settings, API_HOST, API_PORT, API_RELOAD
from core.dependencies import get_storage_backend
from core.exceptions import setup_exception_handlers
from core.logging_config import setup_logging
from core.middleware import LoggingMiddleware
from core.reference_data import get_catalog
from api.routers import (
    health_router,
    profile_router,
    metrics_router,
    recommendations_router,
    reference_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        - Configures structured JSON logging
        - Initializes the storage backend (creates the SQLite schema)
        - Loads the reference catalog so a broken file fails at boot

    Shutdown:
        - Logs shutdown message
    """
    setup_logging(level="INFO", json_format=True)

    logger = logging.getLogger(__name__)
    logger.info("Starting Vitals Service API...")

    storage = get_storage_backend()
    logger.info(
        "Storage initialized",
        extra={"backend": settings.vitals_svc_storage_backend, "storage": type(storage).__name__}
    )
    get_catalog()

    yield

    logger.info("Vitals Service API shutting down...")


app = FastAPI(
    title="Vitals Service API",
    description="Personal health tracking: steps, heart rate and blood pressure, a body profile "
                "with BMI and walking recommendations, and heart-health reference content.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# =============================================================================
# EXCEPTION HANDLERS
# =============================================================================
setup_exception_handlers(app)

# =============================================================================
# MIDDLEWARE
# =============================================================================
# Middleware is executed in REVERSE order of registration.

# 1. CORS Middleware (innermost - closest to routes)
# Credentials carry the session cookie, which browsers refuse with a "*" origin
cors_origins = settings.cors_origins_list
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 2. Logging Middleware (outermost - captures all requests)
app.add_middleware(LoggingMiddleware)

# =============================================================================
# ROUTERS
# =============================================================================
app.include_router(health_router)
app.include_router(profile_router)
app.include_router(metrics_router)
app.include_router(recommendations_router)
app.include_router(reference_router)


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=API_HOST,
        port=API_PORT,
        reload=API_RELOAD
    )
