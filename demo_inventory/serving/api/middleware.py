"""
API Middleware

Request logging with timing and request-id headers, plus Prometheus
request metrics.
"""

import time
from typing import Callable

from fastapi import Request, Response
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
import structlog

logger = structlog.get_logger(__name__)


# =============================================================================
# METRICS
# =============================================================================

HTTP_REQUESTS = Counter(
    "demo_inventory_http_requests_total",
    "Total number of HTTP requests",
    ["method", "route", "status_code"],
)

HTTP_REQUEST_DURATION = Histogram(
    "demo_inventory_http_request_duration_seconds",
    "Time spent handling HTTP requests",
    ["method", "route"],
)


def _route_label(request: Request, base_root_path: str) -> str:
    # Route templates keep label cardinality bounded; routers that mount
    # their prefix record it in root_path
    route = request.scope.get("route")
    if route is None or not hasattr(route, "path"):
        return "unmatched"
    prefix = request.scope.get("root_path", "")[len(base_root_path):]
    return prefix + route.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log all requests with timing information"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        base_root_path = request.scope.get("root_path", "")

        request_id = request.headers.get("X-Request-ID", str(time.time_ns()))

        logger.info(
            "Request started",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else None,
        )

        response = await call_next(request)

        duration = time.perf_counter() - start_time
        duration_ms = duration * 1000

        route = _route_label(request, base_root_path)
        HTTP_REQUESTS.labels(
            method=request.method, route=route, status_code=str(response.status_code)
        ).inc()
        HTTP_REQUEST_DURATION.labels(method=request.method, route=route).observe(duration)

        logger.info(
            "Request completed",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        response.headers["X-Request-ID"] = request_id

        return response
