from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
import pytest

from report_service.obs import (
    REQUEST_COUNTER,
    PrometheusMiddleware,
    metrics_router,
    traced_operation,
)


def test_metrics_endpoint_exposes_counters() -> None:
    app = FastAPI()
    app.add_middleware(PrometheusMiddleware)
    app.include_router(metrics_router)

    client = TestClient(app)
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "http_requests_total" in response.text


def test_request_metrics_use_route_template() -> None:
    app = FastAPI()
    app.add_middleware(PrometheusMiddleware)

    @app.get("/items/{item_id}")
    def read_item(item_id: str) -> dict[str, str]:
        return {"id": item_id}

    client = TestClient(app)
    client.get("/items/abc")
    client.get("/items/def")

    sample = REQUEST_COUNTER.labels(method="GET", path="/items/{item_id}", status="200")
    assert sample._value.get() >= 2


def test_traced_operation_sets_attributes(monkeypatch: pytest.MonkeyPatch) -> None:
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    monkeypatch.setattr(
        "report_service.obs.tracing.trace.get_tracer",
        lambda name, *args, **kwargs: provider.get_tracer(name),
    )

    with traced_operation("report.generate", generated_by="system"):
        pass

    spans = exporter.get_finished_spans()
    assert [span.name for span in spans] == ["report.generate"]
    assert spans[0].attributes["generated_by"] == "system"
