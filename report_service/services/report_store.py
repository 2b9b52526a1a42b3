"""Persistence operations for reports."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from report_service.models import Report
from report_service.services.errors import ReportNotFoundError, ReportStorageError

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {
    "title",
    "date",
    "data",
    "ai_analysis",
    "is_auto_generated",
    "generated_by",
    "status",
}
_NON_NULLABLE_FIELDS = {"title", "date", "data", "is_auto_generated", "status"}


class ReportStore:
    """CRUD access to :class:`Report` rows through a SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, fields: Mapping[str, Any]) -> Report:
        logger.info("Creating report: %s", fields.get("title"))
        report = Report(**{key: value for key, value in fields.items() if key in _UPDATABLE_FIELDS})
        self._session.add(report)
        self._commit(f"create report {fields.get('title')!r}")
        self._session.refresh(report)
        return report

    def find_all(self) -> list[Report]:
        logger.info("Finding all reports")
        statement = select(Report).order_by(Report.date.desc(), Report.created_at.desc())
        try:
            return list(self._session.scalars(statement).all())
        except SQLAlchemyError as exc:
            raise ReportStorageError("Failed to list reports") from exc

    def find_by_id(self, report_id: str) -> Report:
        logger.info("Finding report with id: %s", report_id)
        try:
            report = self._session.get(Report, report_id)
        except SQLAlchemyError as exc:
            raise ReportStorageError(f"Failed to load report {report_id}") from exc
        if report is None:
            raise ReportNotFoundError(f"Report '{report_id}' was not found")
        return report

    def update(self, report_id: str, changes: Mapping[str, Any]) -> Report:
        logger.info("Updating report with id: %s", report_id)
        report = self.find_by_id(report_id)
        for field_name, value in changes.items():
            if field_name not in _UPDATABLE_FIELDS:
                continue
            if value is None and field_name in _NON_NULLABLE_FIELDS:
                continue
            setattr(report, field_name, value)
        self._commit(f"update report {report_id}")
        self._session.refresh(report)
        return report

    def delete(self, report_id: str) -> None:
        logger.info("Removing report with id: %s", report_id)
        report = self.find_by_id(report_id)
        self._session.delete(report)
        self._commit(f"delete report {report_id}")

    def attach_analysis(self, report_id: str, analysis: dict[str, Any]) -> Report:
        logger.info("Updating analysis for report with id: %s", report_id)
        return self.update(report_id, {"ai_analysis": analysis})

    def count(self) -> int:
        try:
            return int(self._session.scalar(select(func.count()).select_from(Report)) or 0)
        except SQLAlchemyError as exc:
            raise ReportStorageError("Failed to count reports") from exc

    def _commit(self, action: str) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise ReportStorageError(f"Failed to {action}") from exc


__all__ = ["ReportStore"]
