"""Prometheus-compatible request metrics for the API."""

from __future__ import annotations

import threading
import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, Tuple

METRIC_PREFIX = "blog_api"
UNMATCHED_ROUTE = "<unmatched>"

MetricKey = Tuple[str, str, str]
RouteKey = Tuple[str, str]


@dataclass
class LatencyStats:
    """Aggregate latency metrics for a route."""

    count: int = 0
    total_duration: float = 0.0

    def observe(self, duration: float) -> None:
        self.count += 1
        self.total_duration += duration


_request_counts: Dict[MetricKey, int] = defaultdict(int)
_error_counts: Dict[MetricKey, int] = defaultdict(int)
_latency_stats: Dict[RouteKey, LatencyStats] = defaultdict(LatencyStats)
_metrics_lock = threading.Lock()


def _route_label(scope: dict[str, Any]) -> str:
    """Label by route template so ids and unrouted paths never become label values."""

    template = getattr(scope.get("route"), "path", None)
    return template or UNMATCHED_ROUTE


class MetricsMiddleware:
    """ASGI middleware counting requests, server errors and latency per route."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):  # type: ignore[override]
        if scope.get("type") != "http" or scope.get("path") == "/metrics":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "UNKNOWN")
        started = time.perf_counter()
        status_holder: Dict[str, int] = {}

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                status_holder["status"] = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            _record(method, _route_label(scope), 500, time.perf_counter() - started)
            raise
        _record(
            method,
            _route_label(scope),
            status_holder.get("status", 500),
            time.perf_counter() - started,
        )


def _record(method: str, route: str, status: int, duration: float) -> None:
    key: MetricKey = (method, route, str(status))
    with _metrics_lock:
        _request_counts[key] += 1
        _latency_stats[(method, route)].observe(duration)
        if status >= 500:
            _error_counts[key] += 1


def reset_metrics() -> None:
    with _metrics_lock:
        _request_counts.clear()
        _error_counts.clear()
        _latency_stats.clear()


def render_metrics() -> str:
    """Render collected metrics in the Prometheus exposition format."""

    requests = f"{METRIC_PREFIX}_requests_total"
    errors = f"{METRIC_PREFIX}_request_errors_total"
    duration = f"{METRIC_PREFIX}_request_duration_seconds"

    lines = [
        f"# HELP {requests} Total HTTP requests",
        f"# TYPE {requests} counter",
    ]
    with _metrics_lock:
        for (method, route, status), value in sorted(_request_counts.items()):
            lines.append(f'{requests}{{method="{method}",path="{route}",status="{status}"}} {value}')

        lines.append(f"# HELP {errors} HTTP requests answered with a 5xx status")
        lines.append(f"# TYPE {errors} counter")
        for (method, route, status), value in sorted(_error_counts.items()):
            lines.append(f'{errors}{{method="{method}",path="{route}",status="{status}"}} {value}')

        lines.append(f"# HELP {duration} Time spent handling requests")
        lines.append(f"# TYPE {duration} summary")
        for (method, route), stats in sorted(_latency_stats.items()):
            labels = f'method="{method}",path="{route}"'
            lines.append(f"{duration}_sum{{{labels}}} {stats.total_duration}")
            lines.append(f"{duration}_count{{{labels}}} {stats.count}")

    return "\n".join(lines) + "\n"
