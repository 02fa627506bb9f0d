"""Liveness and readiness checks. Ready means the database is reachable and migrated."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.db.session import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health():
    """Liveness check. Includes built_at when BACKEND_BUILT_AT is set."""
    settings = get_settings()
    payload: dict = {"status": "ok", "service": settings.app_name, "environment": settings.environment}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """Readiness: DB reachable and alembic revision present (the overload tables exist)."""
    try:
        result = await db.execute(text("SELECT version_num FROM alembic_version"))
        revision = result.scalar()
    except Exception as e:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "error", "database": str(e)})
    if revision is None:
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": "connected", "detail": "migrations not applied"},
        )
    return {"status": "ok", "database": "connected", "revision": revision}
