"""
tenant_platform.observability.middleware

HTTP middleware for request-scoped context.

Responsibilities:
- Generate/propagate request IDs.
- Resolve the tenant slug and expose it on `request.state.tenant`.
- Bind request metadata into structlog contextvars.
- Turn unexpected exceptions into the 500 error envelope.
"""

from __future__ import annotations

import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from tenant_platform.errors import BadRequestError
from tenant_platform.tenancy import TENANT_HEADER, resolve_tenant

log = structlog.get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    - Ensures every request has a request id
    - Resolves the tenant once per request
    - Binds request-scoped contextvars for structured logs
    """

    def __init__(self, app, *, default_tenant: str) -> None:
        super().__init__(app)
        self._default_tenant = default_tenant

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )
        try:
            try:
                tenant = resolve_tenant(
                    header=request.headers.get(TENANT_HEADER),
                    host=request.headers.get("host"),
                    default=self._default_tenant,
                )
            except BadRequestError as e:
                # Exception handlers do not see errors raised in middleware.
                log.warning("tenant_rejected", error=e.message)
                response: Response = JSONResponse(
                    status_code=e.status_code,
                    content={"success": False, "message": e.message, "path": request.url.path},
                )
            else:
                request.state.tenant = tenant
                structlog.contextvars.bind_contextvars(tenant=tenant)
                try:
                    response = await call_next(request)
                except Exception as e:
                    # Handled here so the log line and response keep the request context.
                    log.error("unexpected_exception", error=str(e), exc_info=e)
                    response = JSONResponse(
                        status_code=500,
                        content={
                            "success": False,
                            "message": "Internal server error",
                            "path": request.url.path,
                        },
                    )
        finally:
            # Avoid leaking context across requests under async concurrency.
            structlog.contextvars.clear_contextvars()

        response.headers["x-request-id"] = request_id
        return response


# --- Module Notes -----------------------------------------------------------
# This middleware complements `observability.logging.configure_logging` by ensuring
# request and tenant metadata is present on every log line.
