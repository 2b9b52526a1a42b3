"""Common dependencies for API routes."""
from __future__ import annotations

import random
from collections.abc import Iterator

from fastapi import Depends
from sqlalchemy.orm import Session

from report_service.core.config import get_settings
from report_service.db.session import SessionLocal
from report_service.services import ReportGenerator, ReportShaper, ReportStore, StatsClient


def get_db_session() -> Iterator[Session]:
    """Yield a database session for FastAPI dependencies."""

    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_report_store(session: Session = Depends(get_db_session)) -> ReportStore:
    return ReportStore(session)


def get_stats_client() -> Iterator[StatsClient]:
    """Yield a stats client bound to the configured upstreams."""

    client = StatsClient.from_settings(get_settings())
    try:
        yield client
    finally:
        client.close()


def get_report_shaper() -> ReportShaper:
    settings = get_settings()
    return ReportShaper(
        rng=random.Random(settings.report_random_seed),
        fallback_year=settings.fallback_series_year,
        title_prefix=settings.report_title_prefix,
    )


def get_report_generator(
    store: ReportStore = Depends(get_report_store),
    stats_client: StatsClient = Depends(get_stats_client),
    shaper: ReportShaper = Depends(get_report_shaper),
) -> ReportGenerator:
    return ReportGenerator(store, stats_client, shaper)


__all__ = [
    "get_db_session",
    "get_report_generator",
    "get_report_shaper",
    "get_report_store",
    "get_stats_client",
]
