"""OpenTelemetry adapter for review lifecycle metrics.

Why: Partial writes and recompute volume must be countable in production,
     not only visible in logs.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from importlib import import_module
from typing import Any

from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource

from profrate.application.ports.telemetry_port import TelemetryPort


@dataclass
class OtelConfig:
    """Configuration for OpenTelemetry."""

    service_name: str = "profrate"
    otlp_endpoint: str | None = None  # e.g., "http://localhost:4317"
    environment: str = "production"


class OpenTelemetryAdapter(TelemetryPort):
    """OpenTelemetry adapter for counters and histograms.

    Metrics:
    - Counters: incr() for events (reviews.added, reviews.partial_write, ...)
    - Histograms: observe() for distributions

    Instruments are created lazily, one per metric name. The adapter owns its
    MeterProvider instead of installing a global one, so several containers
    (tests, CLI + app) can coexist in one process.
    """

    def __init__(self, cfg: OtelConfig, readers: Sequence[MetricReader] = ()) -> None:
        """Initialize OpenTelemetry adapter.

        Args:
            cfg: OtelConfig with service name and OTLP endpoint
            readers: Extra metric readers (e.g. InMemoryMetricReader in tests)
        """
        self._cfg = cfg
        self._counters: dict[str, Any] = {}
        self._histograms: dict[str, Any] = {}
        self._provider = self._build_provider(list(readers))
        self._meter = self._provider.get_meter("profrate")

    def _build_provider(self, readers: list[MetricReader]) -> MeterProvider:
        resource = Resource.create(
            {
                "service.name": self._cfg.service_name,
                "deployment.environment": self._cfg.environment,
            }
        )

        if self._cfg.otlp_endpoint:
            # Exporter ships in the optional "otlp" extra
            otel_otlp = import_module("opentelemetry.exporter.otlp.proto.grpc.metric_exporter")
            exporter = otel_otlp.OTLPMetricExporter(endpoint=self._cfg.otlp_endpoint)
            readers.append(PeriodicExportingMetricReader(exporter))

        return MeterProvider(resource=resource, metric_readers=readers)

    def incr(self, name: str, tags: dict[str, Any] | None = None) -> None:
        """Increment a counter metric.

        Examples:
            - incr("reviews.added")
            - incr("reviews.partial_write", {"resource": "professor"})
        """
        if name not in self._counters:
            self._counters[name] = self._meter.create_counter(
                name=name,
                description=f"Counter for {name}",
            )
        self._counters[name].add(1, attributes=tags or {})

    def observe(self, name: str, value: float, tags: dict[str, Any] | None = None) -> None:
        """Observe a value for histogram metric."""
        if name not in self._histograms:
            self._histograms[name] = self._meter.create_histogram(
                name=name,
                description=f"Histogram for {name}",
            )
        self._histograms[name].record(value, attributes=tags or {})

    def shutdown(self) -> None:
        self._provider.shutdown()
