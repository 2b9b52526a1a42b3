"""Report CRUD and generation endpoints."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from report_service.api.deps import get_report_generator, get_report_store
from report_service.schemas import ReportCreate, ReportGenerateRequest, ReportRead, ReportUpdate
from report_service.services import (
    ReportError,
    ReportGenerator,
    ReportNotFoundError,
    ReportStore,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports")


def _http_error(exc: ReportError, message: str) -> HTTPException:
    if isinstance(exc, ReportNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report not found")
    logger.error("%s: %s", message, exc, exc_info=exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.post("/generate", response_model=ReportRead, status_code=status.HTTP_201_CREATED)
def generate_report(
    payload: ReportGenerateRequest | None = None,
    generator: ReportGenerator = Depends(get_report_generator),
) -> ReportRead:
    """Fetch upstream statistics and persist them as an auto-generated report."""

    user_id = payload.user_id if payload is not None else None
    try:
        report = generator.generate(user_id)
    except ReportError as exc:
        raise _http_error(exc, "Failed to generate report") from exc
    return ReportRead.model_validate(report)


@router.post("", response_model=ReportRead, status_code=status.HTTP_201_CREATED)
def create_report(
    payload: ReportCreate,
    store: ReportStore = Depends(get_report_store),
) -> ReportRead:
    try:
        report = store.create(payload.model_dump())
    except ReportError as exc:
        raise _http_error(exc, "Failed to create report") from exc
    return ReportRead.model_validate(report)


@router.get("", response_model=list[ReportRead])
def list_reports(store: ReportStore = Depends(get_report_store)) -> list[ReportRead]:
    try:
        reports = store.find_all()
    except ReportError as exc:
        raise _http_error(exc, "Failed to fetch reports") from exc
    return [ReportRead.model_validate(item) for item in reports]


@router.get("/{report_id}", response_model=ReportRead)
def get_report(report_id: str, store: ReportStore = Depends(get_report_store)) -> ReportRead:
    try:
        report = store.find_by_id(report_id)
    except ReportError as exc:
        raise _http_error(exc, "Failed to fetch report") from exc
    return ReportRead.model_validate(report)


@router.put("/{report_id}", response_model=ReportRead)
def update_report(
    report_id: str,
    payload: ReportUpdate,
    store: ReportStore = Depends(get_report_store),
) -> ReportRead:
    try:
        report = store.update(report_id, payload.model_dump(exclude_unset=True))
    except ReportError as exc:
        raise _http_error(exc, "Failed to update report") from exc
    return ReportRead.model_validate(report)


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(report_id: str, store: ReportStore = Depends(get_report_store)) -> None:
    try:
        store.delete(report_id)
    except ReportError as exc:
        raise _http_error(exc, "Failed to delete report") from exc


@router.post("/{report_id}/analysis", response_model=ReportRead)
def attach_analysis(
    report_id: str,
    analysis: dict[str, Any] = Body(...),
    store: ReportStore = Depends(get_report_store),
) -> ReportRead:
    """Store an analysis document produced outside this service on the report."""

    try:
        report = store.attach_analysis(report_id, analysis)
    except ReportError as exc:
        raise _http_error(exc, "Failed to update report analysis") from exc
    return ReportRead.model_validate(report)


__all__ = [
    "attach_analysis",
    "create_report",
    "delete_report",
    "generate_report",
    "get_report",
    "list_reports",
    "router",
    "update_report",
]
