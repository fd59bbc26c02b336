"""
tenant_platform.db.repositories

Repository package.

Responsibilities:
- Group data-access repositories: tenant-scoped documents and platform-wide reviews.
"""

# Package marker; repositories are imported directly from submodules.
