"""Metrics module initialization."""

from backend_metrics.metrics.config import MetricsConfig, new_metrics_config
from backend_metrics.metrics.context import MetricsContext, create_metrics_context
from backend_metrics.metrics.instruments import Instruments
from backend_metrics.metrics.pusher import (
    MetricsPusher,
    PushResult,
    push_metrics,
    start_metrics_pusher,
)
from backend_metrics.metrics.registry import DefaultLabelRegistry

__all__ = [
    "MetricsConfig",
    "new_metrics_config",
    "MetricsContext",
    "create_metrics_context",
    "Instruments",
    "MetricsPusher",
    "PushResult",
    "push_metrics",
    "start_metrics_pusher",
    "DefaultLabelRegistry",
]
