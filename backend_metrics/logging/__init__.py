"""Logging module initialization."""

from backend_metrics.logging.config import LogConfig
from backend_metrics.logging.logger import new_logger

__all__ = ["LogConfig", "new_logger"]
