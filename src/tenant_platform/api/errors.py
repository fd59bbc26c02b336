"""
tenant_platform.api.errors

Exception handlers that turn errors into the platform's JSON error shape:
`{"success": false, "message": ..., "path": ...}` (+ `errors` for validation).
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tenant_platform.errors import PlatformError
from tenant_platform.observability.logging import get_logger

log = get_logger(__name__)


def _error(request: Request, status_code: int, message: str, **extra) -> JSONResponse:
    content = {"success": False, "message": message, "path": request.url.path, **extra}
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


async def platform_error_handler(request: Request, exc: PlatformError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("platform_error", error=exc.message, exc_info=exc)
    else:
        log.info("platform_error", status_code=exc.status_code, error=exc.message)
    return _error(request, exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    log.warning("http_exception", status_code=exc.status_code, detail=exc.detail)
    message = "Route not found" if exc.status_code == 404 and exc.detail == "Not Found" else exc.detail
    response = _error(request, exc.status_code, str(message))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    log.warning("validation_error", errors=exc.errors())
    return _error(
        request,
        422,
        "Validation failed",
        errors=exc.errors(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlatformError, platform_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]


# --- Module Notes -----------------------------------------------------------
# Unexpected exceptions never reach these handlers: `RequestContextMiddleware`
# turns them into the 500 envelope while the request context is still bound.
