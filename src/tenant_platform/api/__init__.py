"""
tenant_platform.api

API package for the tenant platform.

Responsibilities:
- FastAPI app factory and router modules.
- API-layer dependency wiring, pagination and error handlers.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer should remain thin: request validation + auth + delegation to
# repositories and services.
