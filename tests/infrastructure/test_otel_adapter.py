"""OpenTelemetry adapter records counters and histograms."""

from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from profrate.infrastructure.telemetry.otel_adapter import OpenTelemetryAdapter, OtelConfig


def collected(reader: InMemoryMetricReader) -> dict[str, list]:
    out: dict[str, list] = {}
    data = reader.get_metrics_data()
    if data is None:
        return out
    for rm in data.resource_metrics:
        for sm in rm.scope_metrics:
            for metric in sm.metrics:
                out[metric.name] = list(metric.data.data_points)
    return out


def test_counter_accumulates_per_name():
    reader = InMemoryMetricReader()
    adapter = OpenTelemetryAdapter(OtelConfig(environment="test"), readers=[reader])

    adapter.incr("reviews.added")
    adapter.incr("reviews.added")
    adapter.incr("reviews.partial_write", {"resource": "professor"})

    metrics = collected(reader)
    assert sum(p.value for p in metrics["reviews.added"]) == 2
    partial = metrics["reviews.partial_write"]
    assert partial[0].value == 1
    assert dict(partial[0].attributes) == {"resource": "professor"}
    adapter.shutdown()


def test_histogram_records_values():
    reader = InMemoryMetricReader()
    adapter = OpenTelemetryAdapter(OtelConfig(), readers=[reader])

    adapter.observe("reviews.rating", 5)
    adapter.observe("reviews.rating", 3)

    point = collected(reader)["reviews.rating"][0]
    assert point.count == 2
    assert point.sum == 8
    adapter.shutdown()


def test_adapters_do_not_share_state():
    r1, r2 = InMemoryMetricReader(), InMemoryMetricReader()
    a1 = OpenTelemetryAdapter(OtelConfig(), readers=[r1])
    a2 = OpenTelemetryAdapter(OtelConfig(), readers=[r2])

    a1.incr("ratings.recomputed")

    assert "ratings.recomputed" in collected(r1)
    assert "ratings.recomputed" not in collected(r2)
