import threading
import time

import pytest
import structlog

from backend_metrics.metrics import MetricsConfig, create_metrics_context


class RecordingHandler:
    """prometheus_client push handler that records requests instead of sending them."""

    def __init__(self, error=None):
        self.error = error
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, url, method, timeout, headers, data, **kwargs):
        def handle():
            with self._lock:
                self.calls.append(
                    {"url": url, "method": method, "timeout": timeout, "headers": headers, "data": data}
                )
            if self.error is not None:
                raise self.error

        return handle

    def wait_for_calls(self, count, timeout=2.0):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            with self._lock:
                if len(self.calls) >= count:
                    return True
            time.sleep(0.005)
        return False


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def config():
    return MetricsConfig()


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def context(config, handler):
    return create_metrics_context(config, push_handler=handler)


@pytest.fixture
def app_labels(config):
    return dict(config.default_labels)


class SlowFirstPushHandler(RecordingHandler):
    """Blocks the first push until ``release`` is set."""

    def __init__(self):
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def __call__(self, url, method, timeout, headers, data, **kwargs):
        handle = super().__call__(url, method, timeout, headers, data, **kwargs)

        def slow_handle():
            if not self.entered.is_set():
                self.entered.set()
                self.release.wait(5.0)
            handle()

        return slow_handle
