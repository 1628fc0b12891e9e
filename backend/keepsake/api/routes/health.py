"""Health — liveness and readiness.

Invariants:
    - /health/ answers 200 whenever the process serves requests
    - /health/ready is 200 only when the database answers and the calendar
      timezone resolves; otherwise 503 naming every failed check
"""

import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import keepsake.infrastructure.database as database
from keepsake.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

SERVICE = {"service": "keepsake-api", "version": "1.0.0"}


@router.get("/")
async def liveness():
    return {"status": "healthy", **SERVICE}


@router.get("/ready")
async def readiness():
    # db_manager is read at call time; lifespan replaces it after import
    manager = database.db_manager
    checks = {
        "database": bool(manager) and await manager.health_check(),
        "timezone": _timezone_resolves(get_settings().app_timezone),
    }
    failed = sorted(name for name, ok in checks.items() if not ok)
    if failed:
        logger.warning("Not ready: %s", ", ".join(failed))
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "failed": failed},
        )
    return {"status": "ready", "checks": {name: "healthy" for name in checks}}


def _timezone_resolves(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True
