"""Metrics context shared by every collaborator of the backend."""

from typing import Any, Callable, Optional, Tuple

import structlog
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from prometheus_client.exposition import default_handler

from backend_metrics.logging import LogConfig, new_logger
from backend_metrics.metrics.config import MetricsConfig
from backend_metrics.metrics.instruments import Instruments, declare_instruments
from backend_metrics.metrics.pusher import PushResult, apush_metrics, push_metrics
from backend_metrics.metrics.registry import DefaultLabelRegistry, build_registry


class MetricsContext:
    """Registry, instrument handles and push settings for one process.

    Build it once at startup with ``create_metrics_context()`` and hand
    the same instance to route handlers, the DB layer and job workers.
    """

    def __init__(
        self,
        config: MetricsConfig,
        registry: DefaultLabelRegistry,
        instruments: Instruments,
        logger: Any,
        push_handler: Callable = default_handler,
    ):
        self.config = config
        self.registry = registry
        self.instruments = instruments
        self.logger = logger
        self.push_handler = push_handler

    def push_metrics(self, job_name: Optional[str] = None) -> PushResult:
        return push_metrics(self, job_name)

    async def apush_metrics(self, job_name: Optional[str] = None) -> PushResult:
        return await apush_metrics(self, job_name)

    def exposition(self) -> Tuple[bytes, str]:
        """Serialize the registry for a ``/metrics`` response.

        Returns:
            The text exposition body and its content type.
        """
        return generate_latest(self.registry), CONTENT_TYPE_LATEST


def create_metrics_context(
    config: Optional[MetricsConfig] = None,
    logger: Optional[Any] = None,
    push_handler: Optional[Callable] = None,
    log_config: Optional[LogConfig] = None,
) -> MetricsContext:
    """Build the registry, declare every instrument and return the context.

    Args:
        config: Metrics configuration; defaults to ``MetricsConfig()``.
        logger: structlog-compatible logger for push diagnostics.
        push_handler: prometheus_client push handler, mainly for tests.
        log_config: When given and ``logger`` is not, configure structlog
            with ``new_logger`` and use the resulting logger.
    """
    config = config or MetricsConfig()
    registry = build_registry(config)
    instruments = declare_instruments(registry)

    if logger is None:
        if log_config is not None:
            logger = new_logger(log_config.service_name, log_config)
        else:
            logger = structlog.get_logger("backend_metrics")

    return MetricsContext(
        config=config,
        registry=registry,
        instruments=instruments,
        logger=logger,
        push_handler=push_handler or default_handler,
    )
