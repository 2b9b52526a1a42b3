"""Worker generating system reports on a fixed calendar cadence."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, ContextManager

from sqlalchemy.orm import Session

from report_service.api.deps import get_report_shaper
from report_service.core.config import get_settings
from report_service.core.logging import configure_logging
from report_service.db.session import get_session
from report_service.obs import initialise_tracing, traced_operation
from report_service.services import (
    SYSTEM_USER,
    ReportGenerationError,
    ReportGenerator,
    ReportStore,
    StatsClient,
)
from workers.report_scheduler.scheduler import run_scheduler

logger = logging.getLogger(__name__)


def generate_once(session_factory: Callable[[], ContextManager[Session]] = get_session) -> str | None:
    """Run one generation and return the new report id, or ``None`` on failure."""

    with traced_operation("report_scheduler.run"):
        with session_factory() as session, StatsClient.from_settings() as stats_client:
            generator = ReportGenerator(ReportStore(session), stats_client, get_report_shaper())
            try:
                report = generator.generate(SYSTEM_USER)
            except ReportGenerationError:
                logger.warning("scheduled report generation failed; waiting for next slot")
                return None
            return report.id


async def run() -> None:
    settings = get_settings()
    if settings.enable_tracing:
        initialise_tracing(
            service_name="report-scheduler",
            endpoint=settings.otel_exporter_endpoint,
            instrument_logging=False,
        )
    logger.info("starting report scheduler", extra={"cadence": settings.report_schedule_cadence})

    async def _callback() -> None:
        await asyncio.to_thread(generate_once)

    await run_scheduler(_callback, cadence=settings.report_schedule_cadence)


def main() -> None:
    settings = get_settings()
    configure_logging(settings.logging_config_path, settings.log_level)
    try:
        asyncio.run(run())
    except KeyboardInterrupt:  # pragma: no cover - manual shutdown
        logger.info("report scheduler stopped")


if __name__ == "__main__":
    main()
