from __future__ import annotations

import random
from datetime import datetime, timezone

import pytest

from report_service.services import ReportShaper, ReportShapingError, StatsBundle
from tests.conftest import FIXED_NOW, course_payload, enrollment_payload, payment_payload

EXPECTED_MONTHS = [f"2025-{month:02d}" for month in range(1, 13)]


def _bundle(**overrides: object) -> StatsBundle:
    values = {
        "payment": payment_payload(),
        "enrollment": enrollment_payload(),
        "course": course_payload(),
    }
    values.update(overrides)
    return StatsBundle(**values)


def test_shape_maps_upstream_fields(shaper: ReportShaper) -> None:
    data = shaper.build_data(_bundle())

    assert data["kind"] == "stats"
    assert data["version"] == 1
    assert data["revenue"] == {
        "total": 125000,
        "last30Days": 18000,
        "averageTransaction": 45.5,
        "failedRate": 0.02,
        "byMethod": {"card": 70, "bank_transfer": 30},
        "monthly": payment_payload()["monthlyRevenue"],
    }
    assert data["enrollments"]["total"] == 3400
    assert data["enrollments"]["last30Days"] == 210
    assert data["enrollments"]["completionRate"] == 0.64
    assert data["enrollments"]["popularCourses"] == [{"courseId": "c-1", "title": "Python 101"}]
    assert data["courses"] == {"total": 48, "active": 41}


def test_missing_fields_propagate_as_none(shaper: ReportShaper) -> None:
    data = shaper.build_data(_bundle(payment={"monthlyRevenue": []}, course={}))

    assert data["revenue"]["total"] is None
    assert data["revenue"]["byMethod"] is None
    assert data["courses"] == {"total": None, "active": None}


def test_present_monthly_revenue_is_kept_verbatim(shaper: ReportShaper) -> None:
    series = [{"month": "2024-11", "total": 1.5, "currency": "VND"}]
    payment = payment_payload() | {"monthlyRevenue": series}

    data = shaper.build_data(_bundle(payment=payment))

    assert data["revenue"]["monthly"] == series


def test_absent_monthly_revenue_is_synthesized(shaper: ReportShaper) -> None:
    payment = payment_payload()
    del payment["monthlyRevenue"]

    monthly = shaper.build_data(_bundle(payment=payment))["revenue"]["monthly"]

    assert [entry["month"] for entry in monthly] == EXPECTED_MONTHS
    assert all(5000 <= entry["total"] < 15000 for entry in monthly)


def test_null_monthly_enrollments_are_synthesized(shaper: ReportShaper) -> None:
    enrollment = enrollment_payload() | {"monthlyEnrollments": None}

    monthly = shaper.build_data(_bundle(enrollment=enrollment))["enrollments"]["monthly"]

    assert [entry["month"] for entry in monthly] == EXPECTED_MONTHS
    assert all(100 <= entry["total"] < 300 for entry in monthly)


def test_fallback_year_is_configurable() -> None:
    shaper = ReportShaper(rng=random.Random(0), fallback_year=2026)

    series = shaper.placeholder_series((5000, 15000))

    assert series[0]["month"] == "2026-01"
    assert series[-1]["month"] == "2026-12"


def test_seeded_rng_makes_placeholders_reproducible() -> None:
    first = ReportShaper(rng=random.Random(99)).placeholder_series((100, 300))
    second = ReportShaper(rng=random.Random(99)).placeholder_series((100, 300))

    assert first == second


def test_monthly_comparison_joins_on_month(shaper: ReportShaper) -> None:
    rows = shaper.monthly_comparison(
        [{"month": "2025-03", "total": 1000}],
        [{"month": "2025-03", "total": 50}],
    )

    assert rows == [{"name": "T3", "revenue": 1000, "enrollment": 50}]


def test_monthly_comparison_defaults_unmatched_enrollment_to_zero(shaper: ReportShaper) -> None:
    rows = shaper.monthly_comparison(
        [{"month": "2025-01", "total": 900}, {"month": "2025-12", "total": 1200}],
        [{"month": "2025-01", "total": 30}],
    )

    assert rows == [
        {"name": "T1", "revenue": 900, "enrollment": 30},
        {"name": "T12", "revenue": 1200, "enrollment": 0},
    ]


@pytest.mark.parametrize(
    ("revenue", "enrollment"),
    [
        ([], [{"month": "2025-03", "total": 50}]),
        ([{"month": "2025-03", "total": 1000}], []),
        (None, None),
    ],
)
def test_monthly_comparison_falls_back_when_a_series_is_empty(
    shaper: ReportShaper, revenue: list | None, enrollment: list | None
) -> None:
    rows = shaper.monthly_comparison(revenue, enrollment)

    assert [row["name"] for row in rows] == [f"T{month}" for month in range(1, 13)]
    assert all(5000 <= row["revenue"] < 15000 for row in rows)
    assert all(100 <= row["enrollment"] < 300 for row in rows)


def test_build_data_derives_monthly_stats_from_series(shaper: ReportShaper) -> None:
    data = shaper.build_data(_bundle())

    assert data["monthlyStats"] == [
        {"name": "T1", "revenue": 9000, "enrollment": 150},
        {"name": "T2", "revenue": 11000, "enrollment": 0},
        {"name": "T3", "revenue": 10500, "enrollment": 220},
    ]


def test_non_object_payload_raises_shaping_error(shaper: ReportShaper) -> None:
    with pytest.raises(ReportShapingError):
        shaper.build_data(_bundle(course=["not", "an", "object"]))


def test_non_array_monthly_series_raises_shaping_error(shaper: ReportShaper) -> None:
    payment = payment_payload() | {"monthlyRevenue": {"2025-01": 10}}

    with pytest.raises(ReportShapingError):
        shaper.build_data(_bundle(payment=payment))


def test_malformed_month_key_raises_shaping_error(shaper: ReportShaper) -> None:
    with pytest.raises(ReportShapingError):
        shaper.monthly_comparison([{"month": "March", "total": 1}], [{"month": "March", "total": 2}])


def test_shape_builds_title_and_date(shaper: ReportShaper) -> None:
    shaped = shaper.shape(_bundle())

    assert shaped.title == "Báo cáo tự động - 15/06/2025"
    assert shaped.date == FIXED_NOW
    assert shaped.data["courses"]["total"] == 48


def test_title_prefix_is_configurable() -> None:
    shaper = ReportShaper(title_prefix="Automatic report")

    title = shaper.build_title(datetime(2025, 1, 2, tzinfo=timezone.utc))

    assert title == "Automatic report - 02/01/2025"


def test_monthly_comparison_uses_first_entry_for_repeated_month(shaper: ReportShaper) -> None:
    rows = shaper.monthly_comparison(
        [{"month": "2025-04", "total": 700}],
        [{"month": "2025-04", "total": 30}, {"month": "2025-04", "total": 99}],
    )

    assert rows == [{"name": "T4", "revenue": 700, "enrollment": 30}]


@pytest.mark.parametrize("series", [{}, "", "2025-01"])
def test_empty_non_array_series_raises_shaping_error(shaper: ReportShaper, series: object) -> None:
    with pytest.raises(ReportShapingError):
        shaper.monthly_comparison([{"month": "2025-01", "total": 1}], series)  # type: ignore[arg-type]
    with pytest.raises(ReportShapingError):
        shaper.monthly_comparison(series, [{"month": "2025-01", "total": 1}])  # type: ignore[arg-type]
