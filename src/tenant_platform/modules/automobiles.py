"""
tenant_platform.modules.automobiles

Automobile module: vehicle catalogue per tenant.
"""

from __future__ import annotations

from pydantic import Field

from tenant_platform.db.models import Vehicle
from tenant_platform.modules.collections import (
    CollectionSpec,
    DocumentIn,
    DocumentPatch,
    build_module,
)


class VehicleIn(DocumentIn):
    make: str = Field(min_length=1, max_length=128)
    model: str = Field(min_length=1, max_length=128)


class VehiclePatch(DocumentPatch):
    make: str | None = Field(default=None, min_length=1, max_length=128)
    model: str | None = Field(default=None, min_length=1, max_length=128)


module = build_module(
    name="automobiles",
    title="Automobiles",
    description="Automobile module for vehicle management, dealer operations, and inventory",
    collections=[
        CollectionSpec(
            path="vehicles",
            model=Vehicle,
            create_schema=VehicleIn,
            patch_schema=VehiclePatch,
            label="Vehicle",
        ),
    ],
)
