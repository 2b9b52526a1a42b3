"""Observability utilities."""

from .metrics import (
    REPORT_GENERATION_COUNTER,
    REQUEST_COUNTER,
    REQUEST_ERROR_COUNTER,
    REQUEST_LATENCY_SECONDS,
    UPSTREAM_FETCH_ERROR_COUNTER,
    UPSTREAM_FETCH_LATENCY_SECONDS,
    PrometheusMiddleware,
    metrics_router,
    record_generation,
)
from .tracing import (
    initialise_tracing,
    instrument_fastapi_app,
    instrument_sqlalchemy_engine,
    traced_operation,
)

__all__ = [
    "PrometheusMiddleware",
    "REPORT_GENERATION_COUNTER",
    "REQUEST_COUNTER",
    "REQUEST_ERROR_COUNTER",
    "REQUEST_LATENCY_SECONDS",
    "UPSTREAM_FETCH_ERROR_COUNTER",
    "UPSTREAM_FETCH_LATENCY_SECONDS",
    "metrics_router",
    "record_generation",
    "initialise_tracing",
    "instrument_fastapi_app",
    "instrument_sqlalchemy_engine",
    "traced_operation",
]
