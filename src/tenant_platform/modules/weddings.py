"""
tenant_platform.modules.weddings

Wedding module: venues and their guest capacity.
"""

from __future__ import annotations

from pydantic import Field

from tenant_platform.db.models import Venue
from tenant_platform.modules.collections import (
    CollectionSpec,
    DocumentIn,
    DocumentPatch,
    build_module,
)


class VenueIn(DocumentIn):
    name: str = Field(min_length=1, max_length=256)
    capacity: int = Field(ge=1)


class VenuePatch(DocumentPatch):
    name: str | None = Field(default=None, min_length=1, max_length=256)
    capacity: int | None = Field(default=None, ge=1)


module = build_module(
    name="weddings",
    title="Weddings",
    description="Wedding module for venue management, vendor services, and event planning",
    collections=[
        CollectionSpec(
            path="venues",
            model=Venue,
            create_schema=VenueIn,
            patch_schema=VenuePatch,
            label="Venue",
        ),
    ],
)
