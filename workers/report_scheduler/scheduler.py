"""Calendar-aligned scheduler that triggers report generation."""
from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Awaitable, Callable, Literal

Cadence = Literal["daily", "monthly"]


def next_day_start(reference: datetime) -> datetime:
    """Return the timestamp for midnight after ``reference``."""

    tz = reference.tzinfo or timezone.utc
    tomorrow = reference.date() + timedelta(days=1)
    return datetime(tomorrow.year, tomorrow.month, tomorrow.day, tzinfo=tz)


def next_month_start(reference: datetime) -> datetime:
    """Return the timestamp for the start of the next month."""

    tz = reference.tzinfo or timezone.utc
    year = reference.year + (1 if reference.month == 12 else 0)
    month = 1 if reference.month == 12 else reference.month + 1
    return datetime(year, month, 1, tzinfo=tz)


_NEXT_RUN: dict[str, Callable[[datetime], datetime]] = {
    "daily": next_day_start,
    "monthly": next_month_start,
}


async def run_scheduler(
    callback: Callable[[], Awaitable[None]],
    *,
    cadence: Cadence = "daily",
    now_fn: Callable[[], datetime] | None = None,
    sleep_fn: Callable[[float], Awaitable[None]] = asyncio.sleep,
    iterations: int | None = None,
) -> None:
    """Invoke ``callback`` at the start of every day or month relative to ``now_fn``."""

    if cadence not in _NEXT_RUN:
        raise ValueError(f"unsupported cadence: {cadence}")
    next_run = _NEXT_RUN[cadence]
    now_provider = now_fn or (lambda: datetime.now(timezone.utc))
    executed = 0

    while iterations is None or executed < iterations:
        now = now_provider()
        target = next_run(now)
        delay = max((target - now).total_seconds(), 0.0)
        await sleep_fn(delay)
        await callback()
        executed += 1
