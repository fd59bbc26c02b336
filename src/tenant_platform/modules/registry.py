"""
tenant_platform.modules.registry

Business module registry.

Responsibilities:
- Describe a pluggable business module (router + name/version/description).
- Keep modules in registration order and reject duplicate names.
- Mount every module router on an app under `<base_path>/<name>`.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import APIRouter, FastAPI

from tenant_platform.errors import ModuleRegistrationError
from tenant_platform.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ModuleDescriptor:
    router: APIRouter
    name: str
    version: str = "1.0.0"
    description: str = "No description available"

    def info(self) -> dict[str, str]:
        return {"name": self.name, "version": self.version, "description": self.description}


class ModuleRegistry:
    def __init__(self) -> None:
        self._modules: dict[str, ModuleDescriptor] = {}

    def register(self, module: ModuleDescriptor) -> None:
        if not module.name:
            raise ModuleRegistrationError("Module name must not be empty")
        if module.name in self._modules:
            raise ModuleRegistrationError(f"Module already registered: {module.name}")
        self._modules[module.name] = module
        log.info("module_registered", module=module.name, version=module.version)

    def get(self, name: str) -> ModuleDescriptor | None:
        return self._modules.get(name)

    def all(self) -> list[ModuleDescriptor]:
        return list(self._modules.values())

    def info(self) -> list[dict[str, str]]:
        return [m.info() for m in self._modules.values()]

    def mount(self, app: FastAPI, base_path: str = "/api") -> None:
        base = base_path.rstrip("/")
        for module in self._modules.values():
            app.include_router(module.router, prefix=f"{base}/{module.name}")
            log.info("module_mounted", module=module.name, prefix=f"{base}/{module.name}")

    def __contains__(self, name: object) -> bool:
        return name in self._modules

    def __len__(self) -> int:
        return len(self._modules)

    @classmethod
    def with_defaults(cls) -> ModuleRegistry:
        # Imported here so the registry itself stays free of module-specific imports.
        from tenant_platform.modules import automobiles, business, ecommerce, hotels, weddings

        registry = cls()
        for mod in (automobiles, business, ecommerce, hotels, weddings):
            registry.register(mod.module)
        return registry
