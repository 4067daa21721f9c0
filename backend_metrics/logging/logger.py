"""Logger factory for the backend."""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import structlog
from structlog.types import Processor

from backend_metrics.logging.config import LogConfig, new_config


# LOG_LEVEL values accepted by LogConfig
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

# OpenTelemetry SeverityNumber for each structlog level
SEVERITY_NUMBERS = {
    "DEBUG": 5,
    "INFO": 9,
    "WARNING": 13,
    "ERROR": 17,
    "CRITICAL": 21,
}


def new_logger(service_name: str, config: Optional[LogConfig] = None) -> structlog.BoundLogger:
    """Create a new structured logger.

    Args:
        service_name: The name of the service for log identification.
        config: Logging configuration; read from the environment if omitted.

    Returns:
        A configured structlog logger.
    """
    config = config or new_config(service_name)

    def _format_log_schema(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Shape log record into the envelope schema.

        Input:  flat structlog event dict.
        Output: envelope with timestamp, severity, service block, attributes, error.
        """
        timestamp = event_dict.pop("timestamp", datetime.now(timezone.utc).isoformat())
        severity = str(event_dict.pop("level", method_name.upper())).upper()
        message = str(event_dict.pop("event", ""))

        service_block: Dict[str, Any] = {
            "service.name": config.service_name,
            "service.version": config.service_version,
            "deployment.environment": config.environment,
        }

        error_block = {}
        if "exception" in event_dict:
            error_block = {"exception": event_dict.pop("exception")}
        elif "error" in event_dict:
            error_block = {"message": str(event_dict.pop("error"))}

        return {
            "timestamp": timestamp,
            "severity": severity,
            "severity_num": SEVERITY_NUMBERS.get(severity, 9),
            "message": message,
            "service": service_block,
            "attributes": dict(event_dict),
            "error": error_block,
        }

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _format_log_schema,
        structlog.processors.JSONRenderer(),
    ]

    output_file = sys.stdout if config.enable_console else sys.stderr

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            LOG_LEVELS.get(config.log_level.lower(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output_file),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger().bind(
        service=config.service_name,
        environment=config.environment,
        version=config.service_version,
    )
