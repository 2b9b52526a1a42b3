"""Configuration management for the report service."""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = Field(default="Report Service")
    version: str = Field(default="0.1.0")
    docs_url: str | None = Field(default="/docs")
    redoc_url: str | None = Field(default="/redoc")
    openapi_url: str = Field(default="/openapi.json")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3002)
    cors_origins: str = Field(default="*", description="Comma separated origins, or * for any")
    cors_allow_credentials: bool = Field(default=False)

    database_url: str = Field(default="postgresql+psycopg://reports:reports@db:5432/reports")

    api_base_payment_url: str = Field(default="https://payment.eduforge.io.vn")
    api_base_enrollment_url: str = Field(default="https://enrollment.eduforge.io.vn")
    api_base_course_url: str = Field(default="https://courses.eduforge.io.vn")
    payment_stats_path: str = Field(default="/payment/stats")
    enrollment_stats_path: str = Field(default="/enrollment/stats")
    course_stats_path: str = Field(default="/courses/stats")
    upstream_timeout_seconds: float = Field(default=5.0)
    upstream_max_redirects: int = Field(default=5)

    report_title_prefix: str = Field(default="Báo cáo tự động")
    fallback_series_year: int = Field(default=2025)
    report_random_seed: int | None = Field(default=None)
    report_schedule_cadence: Literal["daily", "monthly"] = Field(default="daily")

    log_level: str = Field(default="INFO")
    logging_config_path: str | None = Field(default=None)

    enable_metrics: bool = Field(default=True)
    enable_tracing: bool = Field(default=True)
    otel_exporter_endpoint: str | None = Field(default=None)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


__all__ = ["Settings", "get_settings"]
