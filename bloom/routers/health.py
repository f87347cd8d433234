"""Health check endpoint."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from bloom.config import get_settings
from bloom.cycles.config_loader import ConfigValidationError, get_tracker_config

router = APIRouter(tags=["system"])
logger = logging.getLogger("bloom.health")


@router.get("/health")
async def health_check() -> dict:
    """Liveness probe. Returns 200 if the API process is up.

    Also reports whether the tracker config could be loaded.
    """
    settings = get_settings()
    config_version: str | None = None
    try:
        config_version = get_tracker_config().version
    except (ConfigValidationError, FileNotFoundError) as exc:
        logger.warning("Health check config probe failed: %s", exc)

    return {
        "status": "healthy" if config_version else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "tracker_config": config_version or "unavailable",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
