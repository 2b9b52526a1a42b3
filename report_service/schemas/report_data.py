"""Report data documents.

Generated reports carry a ``kind``/``version`` stamped stats document. Anything
else, including manually created reports and documents written before an
upstream schema change, is kept as an opaque JSON object.

Field values are never coerced: upstream numbers, strings and nested objects
come back exactly as they were stored. A stats document missing any section
key reads as opaque instead of being padded with defaults.
"""
from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, StrictInt

STATS_DOCUMENT_KIND = "stats"
STATS_DOCUMENT_VERSION = 1


class _DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class MonthlyPoint(_DocumentModel):
    month: Any = Field(..., description="Calendar month as YYYY-MM")
    total: Any


class MonthlyComparison(_DocumentModel):
    name: Any = Field(..., description="Month label such as T3")
    revenue: Any
    enrollment: Any


class RevenueSection(_DocumentModel):
    total: Any
    last_30_days: Any = Field(..., alias="last30Days")
    average_transaction: Any = Field(..., alias="averageTransaction")
    failed_rate: Any = Field(..., alias="failedRate")
    by_method: Any = Field(..., alias="byMethod")
    monthly: list[MonthlyPoint]


class EnrollmentSection(_DocumentModel):
    total: Any
    last_30_days: Any = Field(..., alias="last30Days")
    dropout_rate: Any = Field(..., alias="dropoutRate")
    by_course: Any = Field(..., alias="byCourse")
    average_time_to_complete: Any = Field(..., alias="averageTimeToComplete")
    completion_rate: Any = Field(..., alias="completionRate")
    popular_courses: Any = Field(..., alias="popularCourses")
    monthly: list[MonthlyPoint]


class CourseSection(_DocumentModel):
    total: Any
    active: Any


class StatsReportData(_DocumentModel):
    """Statistics assembled from the payment, enrollment and course services."""

    kind: Literal["stats"]
    version: StrictInt
    revenue: RevenueSection
    enrollments: EnrollmentSection
    courses: CourseSection
    monthly_stats: list[MonthlyComparison] = Field(..., alias="monthlyStats")


class OpaqueReportData(RootModel[dict[str, Any]]):
    """Any JSON object that does not match a known document shape."""


ReportDocument = Union[StatsReportData, OpaqueReportData]


__all__ = [
    "CourseSection",
    "EnrollmentSection",
    "MonthlyComparison",
    "MonthlyPoint",
    "OpaqueReportData",
    "ReportDocument",
    "RevenueSection",
    "STATS_DOCUMENT_KIND",
    "STATS_DOCUMENT_VERSION",
    "StatsReportData",
]
