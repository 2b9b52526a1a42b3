"""Seed script for demo reports."""
from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from report_service.db.session import engine, get_session
from report_service.models import Base, ReportStatus
from report_service.services import ReportShaper, ReportStore, StatsBundle

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_MONTHS = 3


def _demo_bundle(rng: random.Random) -> StatsBundle:
    return StatsBundle(
        payment={
            "totalRevenue": rng.randrange(100_000, 200_000),
            "revenueLast30Days": rng.randrange(10_000, 20_000),
            "averageTransactionValue": round(rng.uniform(30, 60), 2),
            "failedTransactionsRate": round(rng.uniform(0, 0.05), 3),
            "paymentMethodsBreakdown": {"card": 65, "bank_transfer": 30, "wallet": 5},
        },
        enrollment={
            "totalEnrollments": rng.randrange(2_000, 5_000),
            "newEnrollmentsLast30Days": rng.randrange(100, 400),
            "dropoutRate": round(rng.uniform(0.02, 0.15), 3),
            "averageCompletionRate": round(rng.uniform(0.4, 0.8), 2),
        },
        course={"totalCourses": 48, "activeCourses": 41},
    )


def seed(session: Session) -> None:
    """Seed one auto-generated demo report per recent month."""

    store = ReportStore(session)
    if store.count():
        logger.info("Reports already present, skipping seed")
        return

    rng = random.Random(2025)
    shaper = ReportShaper(rng=rng)
    now = datetime.now(timezone.utc)
    for offset in range(DEMO_MONTHS):
        moment = now - timedelta(days=30 * offset)
        report = store.create(
            {
                "title": shaper.build_title(moment),
                "date": moment,
                "data": shaper.build_data(_demo_bundle(rng)),
                "is_auto_generated": True,
                "generated_by": "seed",
                "status": ReportStatus.COMPLETED,
            }
        )
        logger.info("Created report %s (%s)", report.id, report.title)


def main() -> None:
    Base.metadata.create_all(bind=engine)
    with get_session() as session:
        seed(session)


if __name__ == "__main__":
    main()
