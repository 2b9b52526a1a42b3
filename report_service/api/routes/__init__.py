"""Top level API router registration."""
from fastapi import FastAPI

from report_service.api.routes import health, reports


def register_routes(application: FastAPI) -> None:
    """Register all API routers with the FastAPI application."""
    application.include_router(health.router, tags=["health"])
    application.include_router(reports.router, tags=["reports"])


__all__ = ["register_routes"]
