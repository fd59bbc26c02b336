"""
tenant_platform.api.routers.health

Health, readiness and API index endpoints.

Responsibilities:
- Liveness (`/api/health`) including loaded modules and uptime.
- Readiness (`/api/ready`) with DB connectivity validation.
- API index (`/api`) listing module entry points.
"""

from __future__ import annotations

import time
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_platform.api.deps import db_session, settings_dep
from tenant_platform.db.session import ping
from tenant_platform.settings import Settings

router = APIRouter(prefix="/api")


@router.get("/health")
async def health(request: Request, settings: Settings = Depends(settings_dep)) -> dict[str, Any]:
    started_at: float = request.app.state.started_at
    return {
        "success": True,
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": settings.env,
        "modules": request.app.state.modules.info(),
        "uptime": round(time.monotonic() - started_at, 3),
    }


@router.get("/ready")
async def ready(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    # Raises DatabaseUnavailable (503) when the DB cannot be reached.
    await ping(session)
    return {"status": "ready"}


@router.get("")
async def api_index(request: Request, settings: Settings = Depends(settings_dep)) -> dict[str, Any]:
    modules = request.app.state.modules.all()
    return {
        "success": True,
        "message": "Multi-Tenant Business Platform API",
        "version": settings.api_version,
        "modules": {m.name: f"/api/{m.name}" for m in modules},
        "health": "/api/health",
    }


# --- Module Notes -----------------------------------------------------------
# The smoke checker (`tenant_platform.smoke`) probes /api/health and /api first.
