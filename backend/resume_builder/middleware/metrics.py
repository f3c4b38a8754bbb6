"""
Prometheus Metrics Middleware

Provides request/response metrics for monitoring:
- HTTP request latency per route pattern
- Request count by endpoint and status
- Active request gauge
- Resume writes, inline library creations and PDF export latency

Usage:
    from resume_builder.middleware.metrics import setup_metrics

    # In main.py
    app = FastAPI()
    setup_metrics(app)

Metrics Endpoint:
    GET /metrics - Prometheus-format metrics
"""

import time
import logging
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    CONTENT_TYPE_LATEST,
    generate_latest,
    REGISTRY,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

logger = logging.getLogger(__name__)

# ==================== Prometheus Metrics ====================

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of active HTTP requests",
    ["method", "endpoint"]
)

# Resume aggregate writes
RESUME_WRITES = Counter(
    "resume_writes_total",
    "Resume aggregate writes",
    ["operation", "outcome"]  # create/update/delete, ok/rejected
)

INLINE_ENTITIES_CREATED = Counter(
    "inline_library_entities_total",
    "Library entities created from inline resume payload objects",
    ["kind"]
)

PDF_EXPORT_LATENCY = Histogram(
    "pdf_export_seconds",
    "Time to render a resume to PDF",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0]
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware for Prometheus metrics collection.

    Records:
    - Request latency
    - Request count by status code
    - Active request count
    """

    def __init__(self, app: FastAPI, app_name: str = "resume_builder"):
        super().__init__(app)
        self.app_name = app_name

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        """Process request and record metrics."""
        endpoint = self._get_endpoint(request)
        method = request.method

        if endpoint == "/metrics":
            return await call_next(request)

        ACTIVE_REQUESTS.labels(method=method, endpoint=endpoint).inc()
        start_time = time.perf_counter()
        route_path = endpoint

        try:
            response = await call_next(request)
            status = str(response.status_code)
            route_path = self._matched_route_path(request) or endpoint
        except Exception:
            status = "500"
            logger.exception("Request error")
            raise
        finally:
            duration = time.perf_counter() - start_time

            REQUEST_LATENCY.labels(
                method=method,
                endpoint=route_path,
                status=status
            ).observe(duration)

            REQUEST_COUNT.labels(
                method=method,
                endpoint=route_path,
                status=status
            ).inc()

            ACTIVE_REQUESTS.labels(
                method=method,
                endpoint=endpoint
            ).dec()

        return response

    def _get_endpoint(self, request: Request) -> str:
        """
        Get normalized endpoint path from request.

        Uses the route pattern (e.g. /api/resumes/{resume_id}) instead of
        the concrete path so resume ids do not explode label cardinality.
        """
        for route in request.app.routes:
            # Included routers are listed without a path of their own
            path = getattr(route, "path", None)
            if path is None:
                continue
            match, _ = route.matches(request.scope)
            if match == Match.FULL:
                return path

        return request.url.path

    @staticmethod
    def _matched_route_path(request: Request) -> Optional[str]:
        """Route pattern the router resolved for this request, if any."""
        route = request.scope.get("route")
        return getattr(route, "path", None)


def metrics_endpoint(request: Request) -> Response:
    """Return metrics in Prometheus text format."""
    return PlainTextResponse(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST
    )


def setup_metrics(app: FastAPI) -> None:
    """
    Configure Prometheus metrics for FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(PrometheusMiddleware, app_name="resume_builder")
    app.add_route("/metrics", metrics_endpoint, methods=["GET"])

    logger.info("Prometheus metrics configured")


# ==================== Helper Functions ====================

def record_resume_write(operation: str, outcome: str = "ok") -> None:
    """Record a resume create/update/delete and whether it was applied."""
    RESUME_WRITES.labels(operation=operation, outcome=outcome).inc()


def record_inline_entity(kind: str) -> None:
    """Record a library entity created from an inline payload object."""
    INLINE_ENTITIES_CREATED.labels(kind=kind).inc()


def record_pdf_export_latency(duration: float) -> None:
    """Record PDF rendering latency."""
    PDF_EXPORT_LATENCY.observe(duration)
