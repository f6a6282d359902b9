"""
Health check routes.
Probes for load-balancer / orchestrator readiness.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from sqlalchemy import text
from datetime import datetime, timezone
import time
import logging

from catalog.db.database import get_db
from catalog.db.repositories import BenefitRepository
from catalog.core.rate_limiting import limiter, HEALTH_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

# Track startup time for uptime reporting
_STARTUP_TIME = time.time()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/")
@limiter.limit(HEALTH_LIMIT)
def health_check(request: Request, db: Session = Depends(get_db)):
    """
    Check system health: database connectivity, benefit count, uptime.
    """
    health = {
        "status": "healthy",
        "database": "available",
        "benefits": 0,
        "uptime_seconds": int(time.time() - _STARTUP_TIME),
        "timestamp": _now(),
    }

    try:
        health["benefits"] = BenefitRepository(db).count_benefits()
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        health["status"] = "degraded"
        health["database"] = "unavailable"

    return health


@router.get("/ready")
@limiter.limit(HEALTH_LIMIT)
def readiness_check(request: Request, db: Session = Depends(get_db)):
    """Ready only when the database answers."""
    try:
        db.execute(text("SELECT 1"))
        return {"ready": True, "timestamp": _now()}
    except Exception as e:
        logger.error(f"Readiness check failed: {str(e)}")
        return {"ready": False, "error": str(e), "timestamp": _now()}


@router.get("/live")
def liveness_check():
    """Liveness probe. Returns 200 if service is running."""
    return {"alive": True, "uptime_seconds": int(time.time() - _STARTUP_TIME), "timestamp": _now()}
