"""Health & Readiness Probes — liveness and readiness of the usercontent service.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 unless both the account database
      answers and storage_root is a readable directory; the response names
      every failing check
"""

import asyncio
import logging
import os

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "usercontent-fs",
        "version": "1.0.0",
    }


def _storage_readable(settings: Settings) -> bool:
    root = settings.storage_root
    return root.is_dir() and os.access(root, os.R_OK | os.X_OK)


@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_settings)):
    """Readiness probe: account database and sandbox storage."""
    manager = database.db_manager
    checks = {
        "database": await manager.health_check() if manager else False,
        "storage": await asyncio.to_thread(_storage_readable, settings),
    }
    failing = [name for name, ok in checks.items() if not ok]
    if failing:
        logger.warning(f"Not ready: {', '.join(failing)} unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": [f"{name}_unavailable" for name in failing],
            },
        )
    return {"status": "ready", "checks": {name: "healthy" for name in checks}}
