"""ORM models package."""
from .base import Base, TimestampMixin, UTCDateTime
from .report import Report, ReportStatus

__all__ = [
    "Base",
    "Report",
    "ReportStatus",
    "TimestampMixin",
    "UTCDateTime",
]
