"""
tenant_platform.modules

Business modules (automobiles, business, ecommerce, hotels, weddings).

Responsibilities:
- Each submodule exposes a `module` descriptor consumed by `ModuleRegistry`.
"""

# Package marker; the registry imports submodules lazily.
