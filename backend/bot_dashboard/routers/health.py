"""
health.py
/health is a pure liveness check and never touches Postgres.
/health/ready pings the pool so deploys can wait for the database.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from ..db.postgres import Database
from ..deps import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse)
async def health():
    return "OK"


@router.get("/health/ready")
async def ready(db: Database = Depends(get_db)):
    try:
        await db.fetchrow("SELECT 1")
    except Exception as exc:
        logger.warning("Readiness check failed: %s", exc)
        return JSONResponse(status_code=503, content={"ok": False})
    return {"ok": True}
