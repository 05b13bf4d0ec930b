"""
FastAPI middleware for observability.

This module provides:
- Request/Response logging with request_id propagation
- Request timing for latency tracking
- In-memory metrics collection exposed at /metrics

Middleware Stack Order (in main.py):
    1. LoggingMiddleware (outermost - captures everything)
    2. CORS Middleware
    3. Application routes
"""

import logging
import threading
import time
import uuid
from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Deque, Dict, Iterable, List, Tuple

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.datetime_utils import utc_now
from core.logging_config import set_request_id, clear_request_id

logger = logging.getLogger(__name__)

# Label used for requests that matched no route, so requests to unknown paths cannot
# grow the per-route counters without bound
UNMATCHED_ROUTE = "unmatched"


# =============================================================================
# IN-MEMORY METRICS COLLECTOR
# =============================================================================

@dataclass
class RequestMetrics:
    """A single completed request."""
    timestamp: datetime
    method: str
    route: str
    status_code: int
    duration_ms: float
    request_id: str


def _status_class(status_code: int) -> str:
    return f"{status_code // 100}xx"


def _prometheus_block(name: str, help_text: str, kind: str, samples: Iterable[Tuple[str, object]]) -> List[str]:
    """Render one metric family; each sample is (label string, value)."""
    lines = [f"# HELP {name} {help_text}", f"# TYPE {name} {kind}"]
    for labels, value in samples:
        lines.append(f"{name}{{{labels}}} {value}" if labels else f"{name} {value}")
    lines.append("")
    return lines


@dataclass
class MetricsCollector:
    """
    In-memory request and domain counters.

    Keeps the last ``max_history`` request durations for latency
    percentiles. Sync routes run in a threadpool, so every mutation holds
    the lock.
    """
    max_history: int = 1000

    _recent: Deque[RequestMetrics] = field(init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    by_status_class: Counter = field(default_factory=Counter)
    by_route: Counter = field(default_factory=Counter)
    metric_updates: Counter = field(default_factory=Counter)
    validation_failures: int = 0

    def __post_init__(self) -> None:
        self._recent = deque(maxlen=self.max_history)

    def record_request(self, metrics: RequestMetrics) -> None:
        with self._lock:
            self._recent.append(metrics)
            self.by_status_class[_status_class(metrics.status_code)] += 1
            self.by_route[(metrics.method, metrics.route)] += 1
            if metrics.status_code == 400:
                self.validation_failures += 1

    def record_metric_update(self, kind: str) -> None:
        """Count a successful steps / heart_rate / blood_pressure upsert."""
        with self._lock:
            self.metric_updates[kind] += 1

    def get_latency_percentiles(self) -> Dict[str, float]:
        """p50/p95/p99 over the recent window in milliseconds; 0 when empty."""
        with self._lock:
            durations = sorted(r.duration_ms for r in self._recent)
        if not durations:
            return {"p50": 0, "p95": 0, "p99": 0}

        last = len(durations) - 1
        return {
            f"p{p}": round(durations[min(int(len(durations) * p / 100), last)], 2)
            for p in (50, 95, 99)
        }

    def get_summary(self) -> Dict:
        """Flat snapshot backing both /metrics and /metrics/json."""
        latencies = self.get_latency_percentiles()

        with self._lock:
            return {
                "http_requests_total": sum(self.by_status_class.values()),
                "http_requests_2xx_total": self.by_status_class["2xx"],
                "http_requests_4xx_total": self.by_status_class["4xx"],
                "http_requests_5xx_total": self.by_status_class["5xx"],
                "http_request_duration_ms_p50": latencies["p50"],
                "http_request_duration_ms_p95": latencies["p95"],
                "http_request_duration_ms_p99": latencies["p99"],
                "validation_failures_total": self.validation_failures,
                "metric_updates_total": dict(self.metric_updates),
            }

    def get_prometheus_format(self) -> str:
        """Export metrics in Prometheus text format."""
        summary = self.get_summary()
        with self._lock:
            routes = sorted(self.by_route.items())

        lines: List[str] = []
        lines += _prometheus_block(
            "http_requests_total", "Total HTTP requests", "counter",
            [("", summary["http_requests_total"])],
        )
        lines += _prometheus_block(
            "http_requests_by_status", "HTTP requests by status class", "counter",
            [(f'status="{c}"', summary[f"http_requests_{c}_total"]) for c in ("2xx", "4xx", "5xx")],
        )
        lines += _prometheus_block(
            "http_requests_by_route", "HTTP requests by method and route template", "counter",
            [(f'method="{method}",route="{route}"', count) for (method, route), count in routes],
        )
        lines += _prometheus_block(
            "http_request_duration_ms", "Request duration in milliseconds", "gauge",
            [(f'quantile="{q}"', summary[f"http_request_duration_ms_{p}"])
             for q, p in (("0.5", "p50"), ("0.95", "p95"), ("0.99", "p99"))],
        )
        lines += _prometheus_block(
            "validation_failures_total", "Requests rejected with 400", "counter",
            [("", summary["validation_failures_total"])],
        )
        lines += _prometheus_block(
            "metric_updates_total", "Health metric upserts by field", "counter",
            [(f'field="{kind}"', count) for kind, count in sorted(summary["metric_updates_total"].items())],
        )
        return "\n".join(lines)


# Global metrics collector instance, shared across all requests
metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector instance."""
    return metrics_collector


# =============================================================================
# LOGGING MIDDLEWARE
# =============================================================================

def _route_template(request: Request) -> str:
    """The matched route's path template (``/api/profile``), not the raw URL."""
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ROUTE)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request and feeds the metrics collector.

    Every response carries the generated id in ``X-Request-ID`` so a
    client report can be matched to the log lines.
    """

    # Health, metrics and docs traffic is counted but not logged
    QUIET_PATHS = frozenset({"/health", "/ready", "/metrics", "/metrics/json", "/docs", "/redoc", "/openapi.json"})

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = uuid.uuid4().hex[:8]
        set_request_id(request_id)

        method = request.method
        path = request.url.path
        quiet = path in self.QUIET_PATHS
        started = time.perf_counter()

        if not quiet:
            logger.info(
                "Request started",
                extra={"method": method, "path": path, "query": str(request.query_params) or None}
            )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "Request failed with exception",
                extra={"method": method, "path": path, "error": str(e)}
            )
            raise
        finally:
            duration_ms = (time.perf_counter() - started) * 1000
            clear_request_id()

        metrics_collector.record_request(RequestMetrics(
            timestamp=utc_now(),
            method=method,
            route=_route_template(request),
            status_code=response.status_code,
            duration_ms=duration_ms,
            request_id=request_id,
        ))

        if not quiet:
            logger.log(
                logging.WARNING if response.status_code >= 400 else logging.INFO,
                "Request completed",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": round(duration_ms, 2),
                }
            )

        response.headers["X-Request-ID"] = request_id
        return response
