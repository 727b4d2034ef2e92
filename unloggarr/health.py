# FILE: unloggarr/health.py
"""
Health endpoint.

- GET /api/health - service status plus a 2-second reachability probe of the
  MCP server
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from unloggarr import __version__
from unloggarr.deps import get_proxy_client
from unloggarr.mcpo.client import ProxyClient
from unloggarr.settings import get_mcpo_health_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])

_STARTED_AT = time.monotonic()


@router.get("/health")
async def health(proxy: ProxyClient = Depends(get_proxy_client)):
    try:
        mcp_status = await proxy.probe(get_mcpo_health_url())
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - _STARTED_AT, 3),
            "version": __version__,
            "services": {
                "webui": "running",
                "mcp": mcp_status,
            },
        }
    except Exception as e:
        logger.exception("[health] Health check failed")
        return JSONResponse(
            status_code=500,
            content={
                "status": "unhealthy",
                "error": str(e),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )


__all__ = ["router"]
