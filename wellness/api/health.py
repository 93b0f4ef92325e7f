"""Health and readiness endpoints.

/health (liveness) answers 200 whenever the process can respond; the
``status`` field carries the actual state.  A 200 with status=degraded
means "alive but impaired".

/ready (readiness) answers 503 while a configured database is
unreachable, so the load balancer takes this instance out of rotation
without restarting it.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Response
from sqlalchemy import text

from wellness.db import engine as db_engine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


async def _database_status() -> str:
    """``ok``, ``degraded`` or ``not_configured`` (in-memory mode)."""
    if db_engine.engine is None:
        return "not_configured"
    try:
        async with db_engine.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception:
        logger.warning("Database health check failed", exc_info=True)
        return "degraded"
    return "ok"


@router.get("/health")
async def health() -> dict:
    database = await _database_status()
    return {
        "status": "degraded" if database == "degraded" else "ok",
        "checks": {"database": database},
    }


@router.get("/ready")
async def ready() -> Response:
    if await _database_status() == "degraded":
        return Response(status_code=503)
    return Response(status_code=200)
