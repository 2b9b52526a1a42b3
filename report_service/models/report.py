"""Report ORM model."""
from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Index, JSON, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from report_service.models.base import Base, TimestampMixin, UTCDateTime


class ReportStatus(str, enum.Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class Report(TimestampMixin, Base):
    """Persisted snapshot of aggregated business metrics."""

    __tablename__ = "reports"
    __table_args__ = (
        Index("ix_reports_date", "date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    data: Mapped[dict] = mapped_column(JSON, nullable=False)
    ai_analysis: Mapped[dict | None] = mapped_column(JSON)
    is_auto_generated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    generated_by: Mapped[str | None] = mapped_column(String(128))
    status: Mapped[ReportStatus] = mapped_column(
        SAEnum(ReportStatus, name="report_status"), nullable=False, default=ReportStatus.PENDING
    )


__all__ = ["Report", "ReportStatus"]
