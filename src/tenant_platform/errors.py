"""
tenant_platform.errors

Domain error taxonomy.

Responsibilities:
- Give services and repositories a way to signal HTTP-relevant failures
  without importing FastAPI.
- Carry the status code each error maps to (see `api.errors`).
"""

from __future__ import annotations


class PlatformError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(PlatformError):
    status_code = 400
    default_message = "Bad request"


class ForbiddenError(PlatformError):
    status_code = 403
    default_message = "Access forbidden"


class NotFoundError(PlatformError):
    status_code = 404
    default_message = "Resource not found"


class DatabaseUnavailable(PlatformError):
    status_code = 503
    default_message = "Database connection error"


class ModuleRegistrationError(PlatformError):
    # Raised at startup; never reaches a request handler in practice.
    default_message = "Module registration failed"
