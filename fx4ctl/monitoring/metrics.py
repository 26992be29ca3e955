"""
Prometheus metrics for fx4ctl.
"""

from prometheus_client import Counter, Histogram, start_http_server

_metrics_started = False

commands_total = Counter(
    "fx4_commands_total",
    "Total commands sent to the appliance",
    ["method", "path", "outcome"]
)

command_latency_seconds = Histogram(
    "fx4_command_latency_seconds",
    "Time from issuing a command to its callback, in seconds",
    ["method", "path"]
)


def start_metrics_server(port: int = 9090, addr: str = "0.0.0.0"):
    """Start Prometheus metrics server if not already running."""
    global _metrics_started

    if _metrics_started:
        return

    start_http_server(port, addr=addr)
    _metrics_started = True


def track_command(method: str, path: str, outcome: str):
    """Track command count by method, path, and outcome (success/failure)."""
    commands_total.labels(method=method, path=path, outcome=outcome).inc()


def track_command_latency(method: str, path: str, duration_seconds: float):
    """Track command round-trip latency."""
    command_latency_seconds.labels(method=method, path=path).observe(duration_seconds)
