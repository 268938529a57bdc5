"""
Middleware Package

Contains FastAPI middleware for:
- Prometheus metrics collection
- Match scoring latency and volume
"""

from talentmatch.middleware.metrics import (
    PrometheusMiddleware,
    setup_metrics,
    record_match_batch,
    route_label,
    REQUEST_LATENCY,
    REQUEST_COUNT,
    ACTIVE_REQUESTS,
    MATCH_SCORE_LATENCY,
)

__all__ = [
    "PrometheusMiddleware",
    "setup_metrics",
    "record_match_batch",
    "route_label",
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "MATCH_SCORE_LATENCY",
]
