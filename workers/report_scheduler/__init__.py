"""Scheduled report generation."""

from .scheduler import next_day_start, next_month_start, run_scheduler

__all__ = ["next_day_start", "next_month_start", "run_scheduler"]
