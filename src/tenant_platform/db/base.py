"""
tenant_platform.db.base

SQLAlchemy declarative base and shared document columns.

Responsibilities:
- Provide a shared DeclarativeBase for all ORM models.
- Provide `DocumentMixin`: id, tenant slug, open attribute bag, timestamps.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, String, Uuid as SAUuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    # Naive UTC keeps SQLite and Postgres round-trips identical.
    return datetime.now(UTC).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


class DocumentMixin:
    """
    Columns every tenant-owned document carries.

    Declared fields live in typed columns on the concrete model; anything else
    a client sends is kept in `attributes`.
    """

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    tenant: Mapped[str] = mapped_column(String(63), nullable=False, index=True)
    attributes: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=utcnow, onupdate=utcnow)


# --- Module Notes -----------------------------------------------------------
# All ORM models should inherit from `Base` so Alembic and metadata discovery work.
