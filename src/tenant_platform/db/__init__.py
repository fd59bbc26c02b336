"""
tenant_platform.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Routers only talk to repositories; swapping the backend should not touch
# module or review route code.
