"""
tenant_platform.modules.hotels

Hotel module: rooms.
"""

from __future__ import annotations

from pydantic import Field

from tenant_platform.db.models import Room
from tenant_platform.modules.collections import (
    CollectionSpec,
    DocumentIn,
    DocumentPatch,
    build_module,
)


class RoomIn(DocumentIn):
    room_number: str = Field(min_length=1, max_length=32)
    type: str = Field(min_length=1, max_length=64)


class RoomPatch(DocumentPatch):
    room_number: str | None = Field(default=None, min_length=1, max_length=32)
    type: str | None = Field(default=None, min_length=1, max_length=64)


module = build_module(
    name="hotels",
    title="Hotels",
    description="Hotel management module with rooms, bookings, and reviews functionality",
    collections=[
        CollectionSpec(
            path="rooms",
            model=Room,
            create_schema=RoomIn,
            patch_schema=RoomPatch,
            label="Room",
        ),
    ],
)
