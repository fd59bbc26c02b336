"""
tenant_platform.modules.business

Business module: services a company offers.
"""

from __future__ import annotations

from pydantic import Field

from tenant_platform.db.models import Service
from tenant_platform.modules.collections import (
    CollectionSpec,
    DocumentIn,
    DocumentPatch,
    build_module,
)


class ServiceIn(DocumentIn):
    name: str = Field(min_length=1, max_length=256)
    description: str = Field(min_length=1)


class ServicePatch(DocumentPatch):
    name: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = Field(default=None, min_length=1)


module = build_module(
    name="business",
    title="Business",
    description="Business module for company management, services, and appointments",
    collections=[
        CollectionSpec(
            path="services",
            model=Service,
            create_schema=ServiceIn,
            patch_schema=ServicePatch,
            label="Service",
        ),
    ],
)
