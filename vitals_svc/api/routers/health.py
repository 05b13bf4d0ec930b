"""
Operational endpoints: liveness, readiness and request metrics.

/ready reports two dependencies: the storage backend (a ping through
Database or InMemoryStore) and the bundled reference catalog. Either one
failing turns the check into a 503 so a load balancer stops routing here.
"""
import logging
import time
from typing import Any, Callable, Dict, List, Optional

import yaml
from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from core.datetime_utils import format_iso, utc_now
from core.dependencies import get_storage_backend
from core.exceptions import StorageError
from core.middleware import get_metrics_collector
from core.reference_data import get_catalog

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health & Observability"])

SERVICE_NAME = "Vitals Service API"
SERVICE_VERSION = "1.0.0"


# =============================================================================
# RESPONSE MODELS
# =============================================================================

class HealthResponse(BaseModel):
    status: str  # "healthy"
    version: str
    timestamp: str


class DependencyStatus(BaseModel):
    name: str
    status: str  # "ok" or "unavailable"
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class ReadyResponse(BaseModel):
    status: str  # "ready" or "not_ready"
    dependencies: List[DependencyStatus]
    timestamp: str


class MetricsResponse(BaseModel):
    """Mirror of MetricsCollector.get_summary()."""
    http_requests_total: int
    http_requests_2xx_total: int
    http_requests_4xx_total: int
    http_requests_5xx_total: int
    http_request_duration_ms_p50: float
    http_request_duration_ms_p95: float
    http_request_duration_ms_p99: float
    validation_failures_total: int
    metric_updates_total: Dict[str, int]


# =============================================================================
# LIVENESS
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Answers as long as the process is serving requests; touches no dependency."
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy", version=SERVICE_VERSION, timestamp=format_iso(utc_now()))


# =============================================================================
# READINESS
# =============================================================================

def _timed_check(name: str, check: Callable[[], str], failures: tuple) -> DependencyStatus:
    """Run ``check`` and report its message, or the failure it raised."""
    start = time.perf_counter()
    try:
        message = check()
        status = "ok"
    except failures as e:
        message = getattr(e, "detail", None) or str(e)
        status = "unavailable"
        logger.error("Readiness check failed", extra={"dependency": name, "error": message})

    return DependencyStatus(
        name=name,
        status=status,
        latency_ms=round((time.perf_counter() - start) * 1000, 2),
        message=message
    )


def _check_storage(storage) -> DependencyStatus:
    backend = type(storage).__name__

    def check() -> str:
        storage.ping()
        return f"{backend} backend healthy"

    status = _timed_check("storage", check, (StorageError,))
    if status.status == "unavailable":
        status.message = f"{backend}: {status.message}"
    return status


def _check_catalog() -> DependencyStatus:
    def check() -> str:
        catalog = get_catalog()
        return f"{len(catalog.exercises)} exercises, {len(catalog.foods)} foods loaded"

    return _timed_check("reference_catalog", check, (OSError, ValueError, yaml.YAMLError))


@router.get(
    "/ready",
    response_model=ReadyResponse,
    summary="Readiness check",
    description="Checks the storage backend and the reference catalog. Returns 503 if either fails."
)
def readiness_check(
    response: Response,
    storage=Depends(get_storage_backend)
) -> ReadyResponse:
    dependencies = [_check_storage(storage), _check_catalog()]

    ready = all(d.status == "ok" for d in dependencies)
    if not ready:
        response.status_code = 503

    return ReadyResponse(
        status="ready" if ready else "not_ready",
        dependencies=dependencies,
        timestamp=format_iso(utc_now())
    )


# =============================================================================
# METRICS
# =============================================================================

@router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Request counts by status class and route, latency percentiles, "
                "validation failures and metric upserts in Prometheus text format."
)
async def get_metrics() -> Response:
    """
    Scrape configuration (prometheus.yml):
        scrape_configs:
          - job_name: 'vitals-svc'
            static_configs:
              - targets: ['localhost:8000']
            metrics_path: /metrics
    """
    return Response(
        content=get_metrics_collector().get_prometheus_format(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@router.get(
    "/metrics/json",
    response_model=MetricsResponse,
    summary="JSON metrics",
    description="The same counters as /metrics, as JSON."
)
async def get_metrics_json() -> MetricsResponse:
    return MetricsResponse(**get_metrics_collector().get_summary())


@router.get("/", summary="API root", description="Service name, version and links.")
async def root() -> Dict[str, Any]:
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "docs": "/docs",
        "health": "/health",
        "ready": "/ready",
        "metrics": "/metrics"
    }
