"""
tenant_platform.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions and the tenant slug.
- Encapsulate app.state access patterns (engine/sessionmaker).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tenant_platform.settings import Settings, get_settings


def settings_dep(request: Request) -> Settings:
    # The app carries the settings it was built with; fall back to env-driven ones.
    return getattr(request.app.state, "settings", None) or get_settings()


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created in the lifespan of `tenant_platform.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session; handlers commit explicitly.
    async with session_factory() as session:
        yield session


def current_tenant(request: Request) -> str:
    # Set by RequestContextMiddleware before any route runs.
    return request.state.tenant
