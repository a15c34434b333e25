"""
Health check route
"""

import platform
from datetime import datetime, UTC

from fastapi import APIRouter, Depends

from ..context import AppContext, get_context

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health_check(context: AppContext = Depends(get_context)):
    """
    Process status and per-provider credential presence.

    Credential flags only say a key is configured; use /api/{provider}-status
    for an availability probe.
    """
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "uptime": round(context.uptime_seconds(), 3),
        "environment": context.settings.environment,
        "python": platform.python_version(),
        "apis": context.providers.configured_flags(),
    }
