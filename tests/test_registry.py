from prometheus_client import Gauge, generate_latest, make_wsgi_app

from backend_metrics.metrics import MetricsConfig
from backend_metrics.metrics.registry import DefaultLabelRegistry, build_registry


def _metric_names(registry):
    return {metric.name for metric in registry.collect()}


def test_default_labels_are_added_to_samples():
    registry = DefaultLabelRegistry({"app": "svc"})
    gauge = Gauge("temperature", "Temperature", ["room"], registry=registry)
    gauge.labels("kitchen").set(21)

    assert registry.get_sample_value("temperature", {"app": "svc", "room": "kitchen"}) == 21.0
    assert registry.get_sample_value("temperature", {"room": "kitchen"}) is None


def test_sample_labels_override_default_labels():
    registry = DefaultLabelRegistry({"app": "svc"})
    gauge = Gauge("owned", "Owned by another app", ["app"], registry=registry)
    gauge.labels("billing").set(1)

    assert registry.get_sample_value("owned", {"app": "billing"}) == 1.0


def test_empty_default_labels_leave_samples_untouched():
    registry = DefaultLabelRegistry({})
    Gauge("plain", "Plain gauge", registry=registry).set(2)

    assert registry.get_sample_value("plain", {}) == 2.0


def test_build_registry_collects_default_metrics():
    registry = build_registry(MetricsConfig())

    assert "python_info" in _metric_names(registry)
    for metric in registry.collect():
        for sample in metric.samples:
            assert sample.labels["app"] == "test-backend"


def test_build_registry_without_default_metrics():
    registry = build_registry(MetricsConfig(collect_default_metrics=False))

    assert _metric_names(registry) == set()


def test_build_registry_uses_configured_app_name():
    registry = build_registry(MetricsConfig(app_name="billing-api", collect_default_metrics=False))
    Gauge("ready", "Readiness", registry=registry).set(1)

    assert registry.get_sample_value("ready", {"app": "billing-api"}) == 1.0


def test_restricted_registry_keeps_default_labels():
    registry = DefaultLabelRegistry({"app": "test-backend"})
    Gauge("ready", "Readiness", registry=registry).set(1)
    Gauge("other", "Other gauge", registry=registry).set(2)

    body = generate_latest(registry.restricted_registry(["ready"])).decode()

    assert 'ready{app="test-backend"} 1.0' in body
    assert "other" not in body


def test_filtered_wsgi_scrape_keeps_default_labels():
    registry = DefaultLabelRegistry({"app": "test-backend"})
    Gauge("ready", "Readiness", registry=registry).set(1)
    app = make_wsgi_app(registry)
    statuses = []

    body = b"".join(
        app(
            {
                "REQUEST_METHOD": "GET",
                "PATH_INFO": "/metrics",
                "QUERY_STRING": "name[]=ready",
            },
            lambda status, headers: statuses.append(status),
        )
    ).decode()

    assert statuses[0].startswith("200")
    assert 'ready{app="test-backend"} 1.0' in body
