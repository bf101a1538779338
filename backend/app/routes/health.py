"""
Health check endpoint.

Used by load balancers and uptime monitors; it touches the database with a
trivial query and reports ``degraded`` instead of failing when that breaks.
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..api.dependencies import get_db
from ..core.config import settings
from ..schemas.base_responses import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check(response: Response, db: Session = Depends(get_db)) -> HealthResponse:
    response.headers["Cache-Control"] = "no-store"
    try:
        db.execute(text("SELECT 1"))
        return HealthResponse(status="healthy", service=settings.app_name, database="connected")
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return HealthResponse(
            status="degraded", service=settings.app_name, database="unavailable"
        )
