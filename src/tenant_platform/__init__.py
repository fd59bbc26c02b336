"""
tenant_platform

Top-level package for the multi-tenant business-module backend.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "1.0.0"
