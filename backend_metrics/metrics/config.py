"""Metrics configuration."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_APP_NAME = "test-backend"
DEFAULT_PUSHGATEWAY_URL = "http://pushgateway:9091"
DEFAULT_PUSH_INTERVAL = 15.0
DEFAULT_PUSH_TIMEOUT = 30.0


@dataclass
class MetricsConfig:
    """Configuration for the metrics registry and Pushgateway client.

    Values are plain defaults; nothing here reads the environment. Use
    ``new_metrics_config()`` to build one from environment variables at
    application startup.
    """

    app_name: str = DEFAULT_APP_NAME
    default_job: str = DEFAULT_APP_NAME
    pushgateway_url: str = DEFAULT_PUSHGATEWAY_URL
    push_interval: float = DEFAULT_PUSH_INTERVAL
    push_timeout: float = DEFAULT_PUSH_TIMEOUT
    push_enabled: bool = True
    collect_default_metrics: bool = True

    @property
    def default_labels(self) -> dict:
        """Labels attached to every exported series."""
        return {"app": self.app_name}


def new_metrics_config(environ: Optional[Mapping[str, str]] = None) -> MetricsConfig:
    """Create a new MetricsConfig from environment variables."""
    env = os.environ if environ is None else environ

    app_name = env.get("METRICS_APP_NAME") or DEFAULT_APP_NAME

    return MetricsConfig(
        app_name=app_name,
        default_job=env.get("METRICS_JOB_NAME") or app_name,
        pushgateway_url=env.get("PUSHGATEWAY_URL") or DEFAULT_PUSHGATEWAY_URL,
        push_interval=_parse_interval(env.get("METRICS_PUSH_INTERVAL", "")),
        push_enabled=_get_env_bool(env, "METRICS_PUSH_ENABLED", True),
        collect_default_metrics=_get_env_bool(env, "METRICS_DEFAULT_COLLECTORS", True),
    )


def _parse_interval(value: str) -> float:
    """Parse a push interval in seconds (remove 's' suffix if present)."""
    try:
        interval = float(value.strip().rstrip("s"))
    except ValueError:
        return DEFAULT_PUSH_INTERVAL
    return interval if interval > 0 else DEFAULT_PUSH_INTERVAL


def _get_env_bool(env: Mapping[str, str], key: str, default: bool = True) -> bool:
    """Get boolean value from environment variable."""
    value = env.get(key, "").lower()
    if not value:
        return default
    return value in ("true", "1", "yes")
