"""Prometheus registry with default labels."""

import copy
from typing import Dict, Iterable, Iterator

from prometheus_client import (
    CollectorRegistry,
    GCCollector,
    PlatformCollector,
    ProcessCollector,
)
from prometheus_client.metrics_core import Metric
from prometheus_client.registry import RestrictedRegistry

from backend_metrics.metrics.config import MetricsConfig


class DefaultLabelRegistry(CollectorRegistry):
    """Collector registry that stamps default labels onto every sample.

    Labels set on a sample take precedence over a default label of the
    same name. Filtered scrapes (``?name[]=``) go through
    ``restricted_registry`` and are labeled the same way.
    """

    def __init__(self, default_labels: Dict[str, str], auto_describe: bool = False):
        super().__init__(auto_describe=auto_describe)
        self.default_labels = dict(default_labels)

    def collect(self) -> Iterable[Metric]:
        return _with_default_labels(super().collect(), self.default_labels)

    def restricted_registry(self, names: Iterable[str]) -> "DefaultLabelRestrictedRegistry":
        return DefaultLabelRestrictedRegistry(names, self)


class DefaultLabelRestrictedRegistry(RestrictedRegistry):
    """Name-filtered view of a ``DefaultLabelRegistry``."""

    def __init__(self, names: Iterable[str], registry: DefaultLabelRegistry):
        super().__init__(names, registry)
        self.default_labels = registry.default_labels

    def collect(self) -> Iterable[Metric]:
        return _with_default_labels(super().collect(), self.default_labels)


def _with_default_labels(metrics: Iterable[Metric], default_labels: Dict[str, str]) -> Iterator[Metric]:
    for metric in metrics:
        if not default_labels:
            yield metric
            continue
        labeled = copy.copy(metric)
        labeled.samples = [
            sample._replace(labels={**default_labels, **sample.labels})
            for sample in metric.samples
        ]
        yield labeled


def collect_default_metrics(registry: CollectorRegistry) -> None:
    """Register process, platform and GC collectors into ``registry``.

    Collectors unsupported on the current platform yield no samples.
    """
    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)
    GCCollector(registry=registry)


def build_registry(config: MetricsConfig) -> DefaultLabelRegistry:
    """Create the registry for one metrics context."""
    registry = DefaultLabelRegistry(config.default_labels)
    if config.collect_default_metrics:
        collect_default_metrics(registry)
    return registry
