"""Report services: upstream client, shaper, store and generation pipeline."""

from .errors import (
    ReportError,
    ReportGenerationError,
    ReportNotFoundError,
    ReportShapingError,
    ReportStorageError,
    UpstreamStatsError,
)
from .report_generator import SYSTEM_USER, ReportGenerator
from .report_shaper import ReportShaper, ShapedReport
from .report_store import ReportStore
from .stats_client import StatsBundle, StatsClient, UpstreamEndpoint

__all__ = [
    "ReportError",
    "ReportGenerationError",
    "ReportGenerator",
    "ReportNotFoundError",
    "ReportShaper",
    "ReportShapingError",
    "ReportStorageError",
    "ReportStore",
    "SYSTEM_USER",
    "ShapedReport",
    "StatsBundle",
    "StatsClient",
    "UpstreamEndpoint",
    "UpstreamStatsError",
]
