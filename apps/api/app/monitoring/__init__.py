"""Request metrics exposed in the Prometheus text format."""

from .middleware import MetricsMiddleware, render_metrics, reset_metrics
from .router import router

__all__ = ["MetricsMiddleware", "render_metrics", "reset_metrics", "router"]
