"""FastAPI application entrypoint."""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from report_service.api.routes import register_routes
from report_service.core.config import Settings, get_settings
from report_service.core.logging import configure_logging
from report_service.obs import (
    PrometheusMiddleware,
    initialise_tracing,
    instrument_fastapi_app,
    metrics_router,
)


def create_application(settings: Settings | None = None) -> FastAPI:
    """Application factory used by ASGI servers and tests."""
    settings = settings or get_settings()
    configure_logging(settings.logging_config_path, settings.log_level)

    if settings.enable_tracing:
        initialise_tracing(service_name=settings.app_name, endpoint=settings.otel_exporter_endpoint)

    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
    )

    # Credentials are never combined with a wildcard origin.
    origins = ["*"] if settings.cors_origins.strip() == "*" else [
        origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()
    ]
    application.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=settings.cors_allow_credentials and origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.enable_metrics:
        application.add_middleware(PrometheusMiddleware)
        application.include_router(metrics_router)
    register_routes(application)

    if settings.enable_tracing:
        instrument_fastapi_app(application)

    return application


app = create_application()


def run() -> None:
    """Entry point for the ``report-service`` console script."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("report_service.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
