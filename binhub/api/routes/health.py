"""Health Probes — process liveness and marketplace API readiness.

Invariants:
    - GET /health/ answers 200 whenever the process serves requests
    - GET /health/ready answers 503 while the marketplace API base URL is unreachable
    - The push server is reported but never gates readiness (pages work without it)
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from binhub.api.deps import Api, Hub

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])

SERVICE = "binhub-web"
VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": SERVICE, "version": VERSION}


@router.get("/ready")
async def readiness(api: Api, hub: Hub):
    push = {
        "enabled": hub.enabled,
        "open_channels": len(hub.channels),
    }
    if not await api.ping():
        logger.warning("Readiness failed: marketplace API unreachable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "api_unavailable", "push": push},
        )
    return {"status": "ready", "checks": {"api": "reachable"}, "push": push}
