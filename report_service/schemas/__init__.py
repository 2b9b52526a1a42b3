"""Pydantic schemas package."""

from .report import ReportCreate, ReportGenerateRequest, ReportRead, ReportUpdate
from .report_data import (
    MonthlyComparison,
    MonthlyPoint,
    OpaqueReportData,
    ReportDocument,
    StatsReportData,
)

__all__ = [
    "MonthlyComparison",
    "MonthlyPoint",
    "OpaqueReportData",
    "ReportCreate",
    "ReportDocument",
    "ReportGenerateRequest",
    "ReportRead",
    "ReportUpdate",
    "StatsReportData",
]
