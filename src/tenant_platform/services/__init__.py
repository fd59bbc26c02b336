"""
tenant_platform.services

Service layer package.

Responsibilities:
- House boundaries to external providers (payments).
"""

# Package marker.
