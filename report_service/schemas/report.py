"""Pydantic schemas for report resources."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from report_service.models.report import ReportStatus
from report_service.schemas.report_data import ReportDocument


class ReportBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=255)
    date: datetime
    data: dict[str, Any] = Field(..., description="Report data document")
    ai_analysis: dict[str, Any] | None = Field(default=None, alias="aiAnalysis")
    is_auto_generated: bool = Field(default=False, alias="isAutoGenerated")
    generated_by: str | None = Field(default=None, alias="generatedBy", max_length=128)
    status: ReportStatus = Field(default=ReportStatus.PENDING)


class ReportCreate(ReportBase):
    pass


class ReportUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, min_length=1, max_length=255)
    date: datetime | None = None
    data: dict[str, Any] | None = None
    ai_analysis: dict[str, Any] | None = Field(default=None, alias="aiAnalysis")
    is_auto_generated: bool | None = Field(default=None, alias="isAutoGenerated")
    generated_by: str | None = Field(default=None, alias="generatedBy", max_length=128)
    status: ReportStatus | None = None


class ReportRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    title: str
    date: datetime
    data: ReportDocument = Field(..., union_mode="left_to_right")
    ai_analysis: dict[str, Any] | None = Field(default=None, alias="aiAnalysis")
    is_auto_generated: bool = Field(alias="isAutoGenerated")
    generated_by: str | None = Field(default=None, alias="generatedBy")
    status: ReportStatus
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("date", "created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ReportGenerateRequest(BaseModel):
    """Body accepted by the on-demand generation endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str | None = Field(default=None, alias="userId", max_length=128)


__all__ = [
    "ReportBase",
    "ReportCreate",
    "ReportGenerateRequest",
    "ReportRead",
    "ReportUpdate",
]
