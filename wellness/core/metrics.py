"""Prometheus metrics inventory.

Every metric the service exposes is declared here; the modules that own
the behavior import the metric and increment it at the point of action.
Prometheus scrapes the values from GET /metrics.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    # Read-model endpoints are a handful of queries plus in-memory
    # projection; anything past 1s is an incident.
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Projection metrics
# ---------------------------------------------------------------------------

PROJECTION_SKIPPED_RECORDS = Counter(
    "projection_skipped_records_total",
    "Malformed upstream records ignored while building a view",
    ["record"],  # "review" | "reaction" | "progress"
)

REVIEW_REACTIONS = Counter(
    "review_reactions_total",
    "Reactions set on reviews",
    ["kind"],  # "like" | "dislike" | "cleared"
)
