from __future__ import annotations

import os
import random
import sys
from collections.abc import Iterator
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("ENABLE_TRACING", "false")

from report_service.api.deps import get_db_session, get_report_shaper, get_stats_client
from report_service.main import app
from report_service.models import Base
from report_service.services import ReportShaper, ReportStore, StatsClient
from report_service.services.stats_client import UpstreamEndpoint

PAYMENT_BASE = "http://payment.test"
ENROLLMENT_BASE = "http://enrollment.test"
COURSE_BASE = "http://courses.test"
FIXED_NOW = datetime(2025, 6, 15, 8, 30, tzinfo=timezone.utc)

engine = create_engine(
    "sqlite+pysqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def payment_payload() -> dict[str, Any]:
    return {
        "totalRevenue": 125000,
        "revenueLast30Days": 18000,
        "averageTransactionValue": 45.5,
        "failedTransactionsRate": 0.02,
        "paymentMethodsBreakdown": {"card": 70, "bank_transfer": 30},
        "monthlyRevenue": [
            {"month": "2025-01", "total": 9000},
            {"month": "2025-02", "total": 11000},
            {"month": "2025-03", "total": 10500},
        ],
    }


def enrollment_payload() -> dict[str, Any]:
    return {
        "totalEnrollments": 3400,
        "newEnrollmentsLast30Days": 210,
        "dropoutRate": 0.08,
        "enrollmentsByCourse": [{"courseId": "c-1", "count": 1200}],
        "averageTimeToComplete": 42,
        "averageCompletionRate": 0.64,
        "popularCourses": [{"courseId": "c-1", "title": "Python 101"}],
        "monthlyEnrollments": [
            {"month": "2025-01", "total": 150},
            {"month": "2025-03", "total": 220},
        ],
    }


def course_payload() -> dict[str, Any]:
    return {"totalCourses": 48, "activeCourses": 41}


class FakeUpstreams:
    """Routes upstream stats requests to configurable canned responses."""

    def __init__(self) -> None:
        self.responses: dict[str, httpx.Response] = {
            "/payment/stats": httpx.Response(200, json=payment_payload()),
            "/enrollment/stats": httpx.Response(200, json=enrollment_payload()),
            "/courses/stats": httpx.Response(200, json=course_payload()),
        }
        self.requests: list[httpx.Request] = []

    def set_json(self, path: str, payload: Any, status_code: int = 200) -> None:
        self.responses[path] = httpx.Response(status_code, json=payload)

    def fail(self, path: str, status_code: int = 503) -> None:
        self.responses[path] = httpx.Response(status_code, json={"message": "unavailable"})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.get(request.url.path)
        if response is None:
            return httpx.Response(404, json={"message": "not found"})
        return httpx.Response(
            response.status_code,
            content=response.content,
            headers={"content-type": "application/json"},
        )

    def client(self) -> StatsClient:
        return StatsClient(
            {
                "payment": UpstreamEndpoint("payment", PAYMENT_BASE, "/payment/stats"),
                "enrollment": UpstreamEndpoint("enrollment", ENROLLMENT_BASE, "/enrollment/stats"),
                "course": UpstreamEndpoint("course", COURSE_BASE, "/courses/stats"),
            },
            client=httpx.Client(transport=httpx.MockTransport(self.handler)),
        )


@pytest.fixture()
def upstreams() -> FakeUpstreams:
    return FakeUpstreams()


@pytest.fixture()
def stats_client(upstreams: FakeUpstreams) -> Iterator[StatsClient]:
    client = upstreams.client()
    yield client
    client.close()


@pytest.fixture()
def shaper() -> ReportShaper:
    return ReportShaper(rng=random.Random(1234), now_fn=lambda: FIXED_NOW)


@pytest.fixture()
def db_session() -> Iterator[Session]:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture()
def store(db_session: Session) -> ReportStore:
    return ReportStore(db_session)


@pytest.fixture()
def client(
    db_session: Session,
    stats_client: StatsClient,
    shaper: ReportShaper,
) -> Iterator[TestClient]:
    def override_get_db() -> Iterator[Session]:
        try:
            yield db_session
        finally:
            db_session.rollback()

    app.dependency_overrides[get_db_session] = override_get_db
    app.dependency_overrides[get_stats_client] = lambda: stats_client
    app.dependency_overrides[get_report_shaper] = lambda: shaper

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
