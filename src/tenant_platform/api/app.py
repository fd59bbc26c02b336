"""
tenant_platform.api.app

FastAPI app factory for the tenant platform.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Load the business module registry and mount every module under `/api`.
- Initialize and dispose shared infrastructure (DB engine/session factory).
"""

from __future__ import annotations

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from tenant_platform.api.errors import register_exception_handlers
from tenant_platform.api.routers.dev_auth import router as dev_auth_router
from tenant_platform.api.routers.health import router as health_router
from tenant_platform.api.routers.payments import router as payments_router
from tenant_platform.api.routers.reviews import router as reviews_router
from tenant_platform.db.init_db import init_db
from tenant_platform.db.session import create_engine, create_sessionmaker
from tenant_platform.modules.registry import ModuleRegistry
from tenant_platform.observability.logging import configure_logging, get_logger
from tenant_platform.observability.middleware import RequestContextMiddleware
from tenant_platform.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, modules: ModuleRegistry | None = None) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        version=settings.api_version,
        json_output=settings.env != "dev",
    )

    registry = modules if modules is not None else ModuleRegistry.with_defaults()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, modules=[m.name for m in registry.all()])
        # Routers obtain sessions via dependencies (see `tenant_platform.api.deps`).
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Prod runs Alembic migrations instead.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Multi-Tenant Business Platform",
        version=settings.api_version,
        docs_url="/api/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.modules = registry
    app.state.started_at = time.monotonic()

    # Last added runs first: request context wraps CORS and compression.
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware, default_tenant=settings.default_tenant)

    register_exception_handlers(app)

    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(reviews_router)
    app.include_router(payments_router)
    registry.mount(app, base_path="/api")

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; request handling lives in routers and modules.
