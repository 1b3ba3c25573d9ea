"""Liveness and readiness checks for load balancers. Public, no token required."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracker.api.deps import get_app_settings
from fitness_tracker.core.config import Settings
from fitness_tracker.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health(settings: Settings = Depends(get_app_settings)):
    return {"status": "ok", "service": settings.app_name, "environment": settings.environment}


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """503 until the database answers a trivial query."""
    backend = db.get_bind().dialect.name
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Readiness check failed on %s: %s", backend, e)
        return JSONResponse(
            status_code=503,
            content={"error": "Database unavailable", "reason": "database_unavailable", "database": backend},
        )
    return {"status": "ok", "database": backend}
