"""
Prometheus metrics for the license manager.

Custom metrics for verification outcomes, license lifecycle and sync.
"""

from prometheus_client import Counter, Histogram

# Verification metrics
license_verifications_total = Counter(
    "license_verifications_total",
    "Total verification calls by outcome",
    ["outcome"],
)

verification_duration_seconds = Histogram(
    "license_verification_duration_seconds",
    "Verification handling duration in seconds",
    buckets=[0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 2.0],
)

# License lifecycle metrics
licenses_created_total = Counter(
    "licenses_created_total",
    "Total licenses created",
    ["source"],
)

licenses_revoked_total = Counter(
    "licenses_revoked_total",
    "Total licenses revoked",
)

license_requests_created_total = Counter(
    "license_requests_created_total",
    "Total license requests created",
    ["source"],
)

# Sync metrics
sync_pulls_total = Counter(
    "license_sync_pulls_total",
    "Total pulls from the remote store",
    ["result"],
)

sync_pushes_total = Counter(
    "license_sync_pushes_total",
    "Total pushes to the remote store",
    ["action", "result"],
)

admin_actions_total = Counter(
    "license_admin_actions_total",
    "Total admin actions served",
    ["action", "result"],
)

# Cache metrics
cache_hits_total = Counter(
    "cache_hits_total",
    "Total cache hits",
    ["cache_key"],
)

cache_misses_total = Counter(
    "cache_misses_total",
    "Total cache misses",
    ["cache_key"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
