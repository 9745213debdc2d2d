"""
Prometheus metrics for the entitlement service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
    ["application_id"],
)

license_time_updates_total = Counter(
    "license_time_updates_total",
    "Total unused licenses whose time was changed",
    ["application_id"],
)

licenses_banned_total = Counter(
    "licenses_banned_total",
    "Total licenses banned",
    ["application_id"],
)

licenses_deleted_total = Counter(
    "licenses_deleted_total",
    "Total licenses deleted",
    ["application_id", "mode"],
)

# Application user metrics
app_users_created_total = Counter(
    "app_users_created_total",
    "Total application users created",
    ["application_id"],
)

app_user_time_updates_total = Counter(
    "app_user_time_updates_total",
    "Total application users whose expiry was changed",
    ["application_id", "operation"],
)

app_user_state_changes_total = Counter(
    "app_user_state_changes_total",
    "Total application user state changes (ban, pause, hwid reset)",
    ["application_id", "operation"],
)

app_users_deleted_total = Counter(
    "app_users_deleted_total",
    "Total application users deleted",
    ["application_id", "mode"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
