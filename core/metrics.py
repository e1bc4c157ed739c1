"""
Prometheus metrics for the web server activation service.
"""

from prometheus_client import Counter, Histogram

activation_requests_total = Counter(
    "web_server_activation_requests_total",
    "Total web server activation requests",
    ["result"],
)

scope_activations_total = Counter(
    "web_server_scope_activations_total",
    "Total scope migrations by outcome",
    ["scope", "outcome"],
)

recovery_step_failures_total = Counter(
    "web_server_recovery_step_failures_total",
    "Total failed recovery steps",
    ["step"],
)

scope_migration_duration_seconds = Histogram(
    "web_server_scope_migration_duration_seconds",
    "Duration of a single scope migration in seconds",
    ["scope"],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
)
