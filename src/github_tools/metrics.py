"""
Prometheus metrics definitions for github-tools.

Counters, gauges and histograms covering request volume, latency,
throttle delays and the server-advertised quota.

Naming conventions: snake_case, github_tools_ prefix.
"""

from prometheus_client import Counter, Gauge, Histogram

__all__ = [
    "failures_total",
    "rate_limit_remaining",
    "request_duration_seconds",
    "requests_total",
    "throttle_wait_seconds",
]

# ==============================================================================
# COUNTERS
# ==============================================================================

requests_total = Counter(
    "github_tools_requests_total",
    "Total GitHub API requests dispatched",
    ["method", "status"],
    # status: HTTP status code as string, or "transport_error"
)

failures_total = Counter(
    "github_tools_failures_total",
    "Total failed GitHub API calls",
    ["error_type"],
    # error_type: api_error, transport_error
)

# ==============================================================================
# GAUGES
# ==============================================================================

rate_limit_remaining = Gauge(
    "github_tools_rate_limit_remaining",
    "Remaining requests in the current GitHub quota window (X-RateLimit-Remaining)",
)

# ==============================================================================
# HISTOGRAMS
# ==============================================================================

request_duration_seconds = Histogram(
    "github_tools_request_duration_seconds",
    "Time spent in the HTTP exchange, excluding throttle delay",
    ["method"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

throttle_wait_seconds = Histogram(
    "github_tools_throttle_wait_seconds",
    "Time a request was held back by the client-side throttle",
    buckets=[0.0, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)
