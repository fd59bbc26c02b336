"""
tenant_platform.db.repositories.documents

Tenant-scoped repository shared by every module document model.

Responsibilities:
- CRUD over one document model, always filtered by tenant slug.
- Keep declared fields and the open `attributes` bag in step.
"""

from __future__ import annotations

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tenant_platform.db.base import DocumentMixin, utcnow

DocT = TypeVar("DocT", bound=DocumentMixin)


class DocumentRepo(Generic[DocT]):
    def __init__(self, session: AsyncSession, model: type[DocT], *, tenant: str) -> None:
        self._session = session
        self._model = model
        self._tenant = tenant

    async def create(self, *, fields: dict[str, Any], attributes: dict[str, Any]) -> DocT:
        doc = self._model(tenant=self._tenant, attributes=dict(attributes), **fields)
        self._session.add(doc)
        await self._session.flush()
        return doc

    async def get(self, doc_id: uuid.UUID) -> DocT | None:
        doc = await self._session.get(self._model, doc_id)
        # Documents of other tenants are invisible, not forbidden.
        if doc is None or doc.tenant != self._tenant:
            return None
        return doc

    async def list_page(self, *, offset: int, limit: int) -> tuple[list[DocT], int]:
        model = self._model
        total_stmt = select(func.count()).select_from(model).where(model.tenant == self._tenant)
        total = (await self._session.execute(total_stmt)).scalar_one()

        stmt = (
            select(model)
            .where(model.tenant == self._tenant)
            .order_by(desc(model.created_at), desc(model.id))
            .offset(offset)
            .limit(limit)
        )
        docs = list((await self._session.execute(stmt)).scalars().all())
        return docs, int(total)

    async def update(
        self,
        doc: DocT,
        *,
        fields: dict[str, Any],
        attributes: dict[str, Any],
    ) -> DocT:
        for name, value in fields.items():
            setattr(doc, name, value)
        if attributes:
            # Reassign so the JSON column is marked dirty.
            doc.attributes = {**(doc.attributes or {}), **attributes}
        doc.updated_at = utcnow()
        await self._session.flush()
        return doc

    async def delete(self, doc: DocT) -> None:
        await self._session.delete(doc)
        await self._session.flush()


# --- Module Notes -----------------------------------------------------------
# One repo class serves all five module collections; the model class is the only
# thing that varies (see `modules.collections`).
