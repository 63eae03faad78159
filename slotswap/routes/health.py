"""
Health check endpoint.
"""

from datetime import datetime, timezone
import logging
from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..api.dependencies.database import get_db
from ..core.config import settings
from ..schemas.base import StandardizedModel

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


class HealthCheckResponse(StandardizedModel):
    status: str
    service: str
    version: str
    timestamp: datetime
    checks: Dict[str, bool]


@router.get("/health", response_model=HealthCheckResponse)
def health_check(db: Session = Depends(get_db)) -> HealthCheckResponse:
    """
    Basic health check endpoint.

    Returns:
        Service status with a database connectivity check.
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = True
        status = "healthy"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        db_status = False
        status = "degraded"

    return HealthCheckResponse(
        status=status,
        service=settings.api_title,
        version=settings.api_version,
        timestamp=datetime.now(timezone.utc),
        checks={"database": db_status},
    )
