"""Exceptions raised by the report services."""
from __future__ import annotations


class ReportError(RuntimeError):
    """Base exception for report service errors."""


class ReportNotFoundError(ReportError):
    """Raised when a report identifier does not exist."""


class ReportStorageError(ReportError):
    """Raised when the database rejects a report read or write."""


class UpstreamStatsError(ReportError):
    """Raised when an upstream statistics call fails."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


class ReportShapingError(ReportError):
    """Raised when upstream payloads cannot be reshaped into report data."""


class ReportGenerationError(ReportError):
    """Raised when the generation pipeline fails at any stage."""


__all__ = [
    "ReportError",
    "ReportGenerationError",
    "ReportNotFoundError",
    "ReportShapingError",
    "ReportStorageError",
    "UpstreamStatsError",
]
