"""Prometheus metrics definitions for campmeals."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "campmeals_http_requests_total",
    "Total number of HTTP requests processed by the campmeals API",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "campmeals_http_request_duration_seconds",
    "Latency of HTTP requests processed by the campmeals API",
    ["method", "path"],
)

GRIDS_GENERATED = Counter(
    "campmeals_week_grids_total",
    "Number of weekly meal grids computed",
)

ROSTER_ENTRIES_SKIPPED = Counter(
    "campmeals_roster_entries_skipped_total",
    "Roster entries ignored because they could not be interpreted",
    ["kind"],
)

__all__ = [
    "REQUEST_COUNT",
    "REQUEST_LATENCY",
    "GRIDS_GENERATED",
    "ROSTER_ENTRIES_SKIPPED",
]
