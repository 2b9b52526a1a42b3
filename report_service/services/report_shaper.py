"""Normalisation of upstream statistics into report data documents."""
from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

from report_service.schemas.report_data import STATS_DOCUMENT_KIND, STATS_DOCUMENT_VERSION
from report_service.services.errors import ReportShapingError
from report_service.services.stats_client import StatsBundle

REVENUE_RANGE = (5000, 15000)
ENROLLMENT_RANGE = (100, 300)
MONTHS_PER_YEAR = 12

# Upstream field -> normalized field, per section.
REVENUE_FIELDS = {
    "totalRevenue": "total",
    "revenueLast30Days": "last30Days",
    "averageTransactionValue": "averageTransaction",
    "failedTransactionsRate": "failedRate",
    "paymentMethodsBreakdown": "byMethod",
}
ENROLLMENT_FIELDS = {
    "totalEnrollments": "total",
    "newEnrollmentsLast30Days": "last30Days",
    "dropoutRate": "dropoutRate",
    "enrollmentsByCourse": "byCourse",
    "averageTimeToComplete": "averageTimeToComplete",
    "averageCompletionRate": "completionRate",
    "popularCourses": "popularCourses",
}
COURSE_FIELDS = {
    "totalCourses": "total",
    "activeCourses": "active",
}


@dataclass(slots=True, frozen=True)
class ShapedReport:
    """Title, date and data document ready to be persisted."""

    title: str
    date: datetime
    data: dict[str, Any]


def _as_mapping(source: str, payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ReportShapingError(f"{source} payload is not an object: {type(payload).__name__}")
    return payload


def _project(payload: Mapping[str, Any], fields: Mapping[str, str]) -> dict[str, Any]:
    return {target: payload.get(origin) for origin, target in fields.items()}


def _month_number(month: Any) -> int:
    try:
        return int(str(month).split("-")[1])
    except (IndexError, ValueError) as exc:
        raise ReportShapingError(f"malformed month key: {month!r}") from exc


class ReportShaper:
    """Builds the normalized report document from the three upstream payloads.

    Missing monthly series are replaced with placeholder data drawn from ``rng``;
    pass a seeded :class:`random.Random` for reproducible output.
    """

    def __init__(
        self,
        *,
        rng: random.Random | None = None,
        fallback_year: int = 2025,
        title_prefix: str = "Báo cáo tự động",
        now_fn: Callable[[], datetime] | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._fallback_year = fallback_year
        self._title_prefix = title_prefix
        self._now = now_fn or (lambda: datetime.now(timezone.utc))

    def shape(self, bundle: StatsBundle) -> ShapedReport:
        now = self._now()
        return ShapedReport(
            title=self.build_title(now),
            date=now,
            data=self.build_data(bundle),
        )

    def build_title(self, moment: datetime) -> str:
        return f"{self._title_prefix} - {moment:%d/%m/%Y}"

    def build_data(self, bundle: StatsBundle) -> dict[str, Any]:
        payment = _as_mapping("payment", bundle.payment)
        enrollment = _as_mapping("enrollment", bundle.enrollment)
        course = _as_mapping("course", bundle.course)

        revenue_monthly = payment.get("monthlyRevenue")
        if revenue_monthly is None:
            revenue_monthly = self.placeholder_series(REVENUE_RANGE)
        enrollment_monthly = enrollment.get("monthlyEnrollments")
        if enrollment_monthly is None:
            enrollment_monthly = self.placeholder_series(ENROLLMENT_RANGE)

        revenue = _project(payment, REVENUE_FIELDS)
        revenue["monthly"] = revenue_monthly
        enrollments = _project(enrollment, ENROLLMENT_FIELDS)
        enrollments["monthly"] = enrollment_monthly

        return {
            "kind": STATS_DOCUMENT_KIND,
            "version": STATS_DOCUMENT_VERSION,
            "revenue": revenue,
            "enrollments": enrollments,
            "courses": _project(course, COURSE_FIELDS),
            "monthlyStats": self.monthly_comparison(revenue_monthly, enrollment_monthly),
        }

    def placeholder_series(self, value_range: tuple[int, int]) -> list[dict[str, Any]]:
        """Twelve ``{month, total}`` entries for the fallback year."""

        low, high = value_range
        return [
            {"month": f"{self._fallback_year}-{month:02d}", "total": self._rng.randrange(low, high)}
            for month in range(1, MONTHS_PER_YEAR + 1)
        ]

    def monthly_comparison(
        self,
        revenue_monthly: Sequence[Mapping[str, Any]] | None,
        enrollment_monthly: Sequence[Mapping[str, Any]] | None,
    ) -> list[dict[str, Any]]:
        """Join revenue and enrollment series on their month key."""

        for series in (revenue_monthly, enrollment_monthly):
            if series is not None and (not isinstance(series, Sequence) or isinstance(series, str)):
                raise ReportShapingError("monthly series must be arrays")
        if not revenue_monthly or not enrollment_monthly:
            return self._placeholder_comparison()

        try:
            # First entry wins when a month repeats.
            enrollment_by_month: dict[Any, Any] = {}
            for entry in enrollment_monthly:
                enrollment_by_month.setdefault(entry["month"], entry.get("total", 0))
            rows = []
            for entry in revenue_monthly:
                month = entry["month"]
                rows.append(
                    {
                        "name": f"T{_month_number(month)}",
                        "revenue": entry.get("total"),
                        "enrollment": enrollment_by_month.get(month, 0),
                    }
                )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ReportShapingError(f"malformed monthly series entry: {exc}") from exc
        return rows

    def _placeholder_comparison(self) -> list[dict[str, Any]]:
        return [
            {
                "name": f"T{month}",
                "revenue": self._rng.randrange(*REVENUE_RANGE),
                "enrollment": self._rng.randrange(*ENROLLMENT_RANGE),
            }
            for month in range(1, MONTHS_PER_YEAR + 1)
        ]


__all__ = [
    "COURSE_FIELDS",
    "ENROLLMENT_FIELDS",
    "ENROLLMENT_RANGE",
    "REVENUE_FIELDS",
    "REVENUE_RANGE",
    "ReportShaper",
    "ShapedReport",
]
