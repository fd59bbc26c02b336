"""
tenant_platform.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request and tenant context propagation for consistent log enrichment.
"""

# Package marker.
