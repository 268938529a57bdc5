"""
Prometheus Metrics Middleware

Provides request/response metrics for monitoring:
- HTTP request latency (p50, p95, p99)
- Request count by endpoint and status
- Active request gauge
- Match scoring latency and volume per matching flow

Usage:
    from talentmatch.middleware.metrics import setup_metrics

    # In main.py
    app = FastAPI()
    setup_metrics(app)

Metrics Endpoint:
    GET /metrics - Prometheus-format metrics
"""

import time
import logging
from typing import Callable

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

logger = logging.getLogger(__name__)

# ==================== Prometheus Metrics ====================

# Request latency histogram with custom buckets for sub-second monitoring
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

# Labelled by method only: the route is not resolved until the request is handled
ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of in-flight HTTP requests",
    ["method"]
)

# Matching metrics
MATCH_SCORE_LATENCY = Histogram(
    "match_score_calculation_seconds",
    "Time to score and rank one batch",
    ["flow"],  # job_match, candidate_search
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5]
)

PAIRS_SCORED = Counter(
    "match_pairs_scored_total",
    "Number of record pairs considered for scoring",
    ["flow"]
)

RESULTS_RETURNED = Counter(
    "match_results_returned_total",
    "Number of results returned after threshold filtering",
    ["flow"]
)

UNMATCHED_ROUTE = "unmatched"


def route_label(scope: dict) -> str:
    """
    Endpoint label for a handled request.

    Routing stores the matched route in the ASGI scope, so the label is the
    route template ("/match-jobs") rather than the raw path. Requests that
    matched nothing share one label to keep cardinality bounded.
    """
    route = scope.get("route")
    path = getattr(route, "path_format", None) or getattr(route, "path", None)
    return path if isinstance(path, str) else UNMATCHED_ROUTE


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Records latency and status counts per matched route for every request
    except the /metrics scrape itself.
    """

    def __init__(self, app: FastAPI, app_name: str = "talentmatch"):
        super().__init__(app)
        self.app_name = app_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        status = "500"
        ACTIVE_REQUESTS.labels(method=method).inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        except Exception as e:
            logger.error(f"Unhandled error on {method} {request.url.path}: {e}")
            raise
        finally:
            endpoint = route_label(request.scope)
            REQUEST_LATENCY.labels(method=method, endpoint=endpoint, status=status).observe(
                time.perf_counter() - start_time
            )
            REQUEST_COUNT.labels(method=method, endpoint=endpoint, status=status).inc()
            ACTIVE_REQUESTS.labels(method=method).dec()


def metrics_endpoint(request: Request) -> Response:
    """Endpoint handler for Prometheus metrics scraping."""
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
    app.add_middleware(PrometheusMiddleware, app_name="talentmatch")
    app.add_route("/metrics", metrics_endpoint, methods=["GET"])

    logger.info("Prometheus metrics configured")


# ==================== Helper Functions ====================

def record_match_batch(flow: str, pairs: int, returned: int, duration: float) -> None:
    """Record one scored-and-ranked batch for a matching flow."""
    MATCH_SCORE_LATENCY.labels(flow=flow).observe(duration)
    PAIRS_SCORED.labels(flow=flow).inc(pairs)
    RESULTS_RETURNED.labels(flow=flow).inc(returned)
