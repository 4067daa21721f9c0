"""
Backend metrics for Python services

Prometheus instruments for the HTTP backend, a registry with default
labels, and Pushgateway push helpers.
"""

from backend_metrics.logging import new_logger, LogConfig
from backend_metrics.metrics import (
    Instruments,
    MetricsConfig,
    MetricsContext,
    MetricsPusher,
    PushResult,
    create_metrics_context,
    new_metrics_config,
    start_metrics_pusher,
)

__all__ = [
    # Logging
    "new_logger",
    "LogConfig",
    # Metrics
    "Instruments",
    "MetricsConfig",
    "MetricsContext",
    "MetricsPusher",
    "PushResult",
    "create_metrics_context",
    "new_metrics_config",
    "start_metrics_pusher",
]

__version__ = "0.1.0"
