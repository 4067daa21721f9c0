"""Pushgateway metrics pusher."""

import asyncio
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from prometheus_client import pushadd_to_gateway

if TYPE_CHECKING:
    from backend_metrics.metrics.context import MetricsContext


@dataclass(frozen=True)
class PushResult:
    """Outcome of a single push to the Pushgateway."""

    ok: bool
    job_name: str
    reason: Optional[str] = None


def push_metrics(context: "MetricsContext", job_name: Optional[str] = None) -> PushResult:
    """Push the current registry snapshot to the Pushgateway.

    Uses POST (pushadd) so series already grouped under the job are
    updated, not replaced. Transport failures are logged once and
    returned as a failed ``PushResult``; they are never raised and
    never retried.

    Args:
        context: The metrics context whose registry is pushed.
        job_name: Grouping job name; defaults to ``config.default_job``.

    Returns:
        The push outcome.
    """
    config = context.config
    job = config.default_job if job_name is None else job_name

    try:
        pushadd_to_gateway(
            config.pushgateway_url,
            job=job,
            registry=context.registry,
            timeout=config.push_timeout,
            handler=context.push_handler,
        )
    except Exception as e:
        # Scraping still works even if the push side-channel is down
        context.logger.error(
            "pushgateway push failed",
            error=str(e),
            job=job,
            gateway=config.pushgateway_url,
        )
        return PushResult(ok=False, job_name=job, reason=str(e))

    context.logger.debug("pushgateway push succeeded", job=job, gateway=config.pushgateway_url)
    return PushResult(ok=True, job_name=job)


async def apush_metrics(context: "MetricsContext", job_name: Optional[str] = None) -> PushResult:
    """Awaitable ``push_metrics``; the HTTP request runs on a worker thread."""
    return await asyncio.to_thread(push_metrics, context, job_name)


class MetricsPusher:
    """Periodically pushes a context's metrics to the Pushgateway.

    Each ``start()`` gets its own stop event, so a loop left running by a
    timed-out ``stop()`` still exits once its in-flight push returns.
    """

    def __init__(
        self,
        context: "MetricsContext",
        interval: float,
        job_name: Optional[str] = None,
        join_timeout: float = 5.0,
    ):
        self.context = context
        self.interval = interval
        self.job_name = job_name
        self.join_timeout = join_timeout
        self.last_result: Optional[PushResult] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        """Start the background push thread.

        No-op while a previous loop is still alive, including one that is
        finishing a slow push after ``stop()``.
        """
        if self.running:
            return
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._push_loop,
            args=(self._stop_event,),
            name="metrics-pusher",
            daemon=True,
        )
        self._thread.start()

    def stop(self):
        """Stop the pusher and push remaining metrics."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=self.join_timeout)
            if not self._thread.is_alive():
                self._thread = None
            else:
                self.context.logger.warning(
                    "metrics pusher still busy after stop", timeout=self.join_timeout
                )
        self._push()  # Final push

    def _push_loop(self, stop_event: threading.Event):
        """Background loop to push metrics."""
        while not stop_event.wait(self.interval):
            self._push()

    def _push(self):
        # Failures are already logged by push_metrics; the loop keeps going.
        self.last_result = push_metrics(self.context, self.job_name)


def start_metrics_pusher(
    context: "MetricsContext", job_name: Optional[str] = None
) -> Optional[MetricsPusher]:
    """Start a periodic pusher using the context's configured interval.

    Returns the running pusher, or None if pushing is disabled.
    """
    if not context.config.push_enabled:
        context.logger.info("pushgateway push disabled")
        return None

    pusher = MetricsPusher(context, context.config.push_interval, job_name)
    pusher.start()
    return pusher
