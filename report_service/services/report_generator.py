"""Report generation pipeline: fetch upstream stats, shape them, persist the report."""
from __future__ import annotations

import logging

from report_service.models import Report, ReportStatus
from report_service.obs import record_generation, traced_operation
from report_service.services.errors import ReportGenerationError
from report_service.services.report_shaper import ReportShaper
from report_service.services.report_store import ReportStore
from report_service.services.stats_client import StatsClient

logger = logging.getLogger(__name__)

SYSTEM_USER = "system"


class ReportGenerator:
    """Coordinates a single fetch -> shape -> persist run.

    Nothing is written unless every upstream call and the shaping step succeed.
    The stored report is marked ``COMPLETED`` because it only exists once the
    pipeline has finished.
    """

    def __init__(self, store: ReportStore, stats_client: StatsClient, shaper: ReportShaper) -> None:
        self._store = store
        self._stats_client = stats_client
        self._shaper = shaper

    def generate(self, user_id: str | None = None) -> Report:
        generated_by = user_id or SYSTEM_USER
        logger.info("Generating report for user %s", generated_by)

        with traced_operation("report.generate", generated_by=generated_by):
            try:
                bundle = self._stats_client.fetch_all()
                shaped = self._shaper.shape(bundle)
                report = self._store.create(
                    {
                        "title": shaped.title,
                        "date": shaped.date,
                        "data": shaped.data,
                        "is_auto_generated": True,
                        "generated_by": generated_by,
                        "status": ReportStatus.COMPLETED,
                    }
                )
            except Exception as exc:
                logger.exception("Error generating report for user %s", generated_by)
                record_generation("failed")
                raise ReportGenerationError("Failed to generate report") from exc

        record_generation("succeeded")
        logger.info("Generated report %s for user %s", report.id, generated_by)
        return report


__all__ = ["ReportGenerator", "SYSTEM_USER"]
