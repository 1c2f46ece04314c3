"""
Health check endpoints. Public; no identity required.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db

router = APIRouter(prefix="/health", tags=["Health"])
logger = logging.getLogger(__name__)


def check_database(db: Session) -> Dict[str, str]:
    """Run a trivial query and report whether the database answered."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return {"status": "unhealthy", "message": str(e)}
    return {"status": "healthy", "message": "Database connection successful"}


@router.get("")
async def health_check() -> Dict[str, str]:
    """Liveness probe: 200 whenever the process is serving requests."""
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/detailed")
def detailed_health_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Readiness probe including database connectivity."""
    checks = {"database": check_database(db)}
    healthy = all(check["status"] == "healthy" for check in checks.values())
    return {
        "status": "healthy" if healthy else "unhealthy",
        "service": settings.PROJECT_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": checks,
    }
