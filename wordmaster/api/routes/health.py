"""Liveness and readiness probes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from wordmaster.core.config import settings
from wordmaster.core.database import get_db
from wordmaster.services.scheduler import get_scheduler_orchestrator

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """
    Readiness: database round-trip plus scheduler state.

    "degraded" when the database is unreachable. A stopped scheduler is
    reported but does not degrade the service (ENABLE_BACKGROUND_JOBS=false
    is a valid deployment).
    """
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        database = f"error: {e}"

    return {
        "status": "healthy" if database == "connected" else "degraded",
        "version": settings.VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "database": database,
            "scheduler": "running" if get_scheduler_orchestrator().is_running else "stopped",
        },
    }


@router.get("/healthz")
async def healthz():
    """Liveness only (no database access)."""
    return {"status": "healthy"}
