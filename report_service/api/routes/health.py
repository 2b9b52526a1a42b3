"""Liveness and readiness endpoints for the report service."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from report_service.api.deps import get_db_session
from report_service.core.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/healthz", summary="Liveness check")
def health_check() -> dict[str, str]:
    settings = get_settings()
    return {"status": "ok", "service": settings.app_name, "version": settings.version}


@router.get("/readyz", summary="Readiness check")
def readiness_check(response: Response, session: Session = Depends(get_db_session)) -> dict[str, Any]:
    """Report ready only while the reports database answers queries."""

    try:
        session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Readiness check failed: database unreachable", exc_info=True)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "unavailable", "database": "unreachable"}
    return {"status": "ready", "database": "ok"}
