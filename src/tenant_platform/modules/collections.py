"""
tenant_platform.modules.collections

Document collections shared by the business modules.

Responsibilities:
- Base request schemas that keep unknown fields as free-form attributes.
- `build_collection_router`: tenant-scoped list/get/create/update/delete routes
  for one document model.
- `build_module`: module info route plus its collection routers.
"""

# No `from __future__ import annotations` here: the route handlers are built in
# closures and FastAPI must see the concrete schema classes in their annotations.

import uuid
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from tenant_platform.api.deps import current_tenant, db_session
from tenant_platform.api.pagination import PageParams, Pagination, page_params
from tenant_platform.auth.deps import require_roles
from tenant_platform.db.base import DocumentMixin
from tenant_platform.db.repositories.documents import DocumentRepo
from tenant_platform.errors import NotFoundError
from tenant_platform.modules.registry import ModuleDescriptor
from tenant_platform.observability.logging import get_logger

log = get_logger(__name__)

EDITOR_ROLE = "editor"


class DocumentIn(BaseModel):
    """Declared fields are validated; anything else is stored as an attribute."""

    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)

    def split(self) -> tuple[dict[str, Any], dict[str, Any]]:
        fields = self.model_dump(exclude=set(self.model_extra or {}))
        return fields, dict(self.model_extra or {})


class DocumentPatch(DocumentIn):
    def split(self) -> tuple[dict[str, Any], dict[str, Any]]:
        extra = set(self.model_extra or {})
        fields = self.model_dump(exclude=extra, exclude_unset=True, exclude_none=True)
        return fields, dict(self.model_extra or {})


@dataclass(frozen=True, slots=True)
class CollectionSpec:
    path: str
    model: type[DocumentMixin]
    create_schema: type[DocumentIn]
    patch_schema: type[DocumentPatch]
    label: str

    @property
    def field_names(self) -> list[str]:
        return list(self.create_schema.model_fields)


def serialize_document(doc: DocumentMixin, field_names: list[str]) -> dict[str, Any]:
    out: dict[str, Any] = {"id": str(doc.id)}
    for name in field_names:
        out[name] = getattr(doc, name)
    out["attributes"] = doc.attributes or {}
    out["tenant"] = doc.tenant
    out["created_at"] = doc.created_at.isoformat()
    out["updated_at"] = doc.updated_at.isoformat()
    return out


def build_collection_router(spec: CollectionSpec) -> APIRouter:
    router = APIRouter(prefix=f"/{spec.path}")
    create_schema = spec.create_schema
    patch_schema = spec.patch_schema
    fields = spec.field_names
    not_found = f"{spec.label} not found"

    def repo_for(session: AsyncSession, tenant: str) -> DocumentRepo:
        return DocumentRepo(session, spec.model, tenant=tenant)

    @router.get("")
    async def list_documents(
        page: PageParams = Depends(page_params),
        tenant: str = Depends(current_tenant),
        session: AsyncSession = Depends(db_session),
    ) -> dict[str, Any]:
        docs, total = await repo_for(session, tenant).list_page(offset=page.offset, limit=page.limit)
        return {
            "success": True,
            "data": [serialize_document(d, fields) for d in docs],
            "pagination": Pagination.build(page, total).model_dump(),
        }

    @router.get("/{doc_id}")
    async def get_document(
        doc_id: uuid.UUID,
        tenant: str = Depends(current_tenant),
        session: AsyncSession = Depends(db_session),
    ) -> dict[str, Any]:
        doc = await repo_for(session, tenant).get(doc_id)
        if doc is None:
            raise NotFoundError(not_found)
        return {"success": True, "data": serialize_document(doc, fields)}

    @router.post(
        "",
        status_code=HTTP_201_CREATED,
        dependencies=[Depends(require_roles(EDITOR_ROLE))],
    )
    async def create_document(
        body: create_schema,  # type: ignore[valid-type]
        tenant: str = Depends(current_tenant),
        session: AsyncSession = Depends(db_session),
    ) -> dict[str, Any]:
        declared, attributes = body.split()
        doc = await repo_for(session, tenant).create(fields=declared, attributes=attributes)
        await session.commit()
        log.info("document_created", collection=spec.path, id=str(doc.id))
        return {
            "success": True,
            "message": f"{spec.label} created successfully",
            "data": serialize_document(doc, fields),
        }

    @router.patch("/{doc_id}", dependencies=[Depends(require_roles(EDITOR_ROLE))])
    async def update_document(
        doc_id: uuid.UUID,
        body: patch_schema,  # type: ignore[valid-type]
        tenant: str = Depends(current_tenant),
        session: AsyncSession = Depends(db_session),
    ) -> dict[str, Any]:
        repo = repo_for(session, tenant)
        doc = await repo.get(doc_id)
        if doc is None:
            raise NotFoundError(not_found)
        declared, attributes = body.split()
        doc = await repo.update(doc, fields=declared, attributes=attributes)
        await session.commit()
        return {
            "success": True,
            "message": f"{spec.label} updated successfully",
            "data": serialize_document(doc, fields),
        }

    @router.delete(
        "/{doc_id}",
        status_code=HTTP_204_NO_CONTENT,
        dependencies=[Depends(require_roles(EDITOR_ROLE))],
    )
    async def delete_document(
        doc_id: uuid.UUID,
        tenant: str = Depends(current_tenant),
        session: AsyncSession = Depends(db_session),
    ) -> Response:
        repo = repo_for(session, tenant)
        doc = await repo.get(doc_id)
        if doc is None:
            raise NotFoundError(not_found)
        await repo.delete(doc)
        await session.commit()
        log.info("document_deleted", collection=spec.path, id=str(doc_id))
        return Response(status_code=HTTP_204_NO_CONTENT)

    return router


def build_module(
    *,
    name: str,
    title: str,
    description: str,
    collections: list[CollectionSpec],
    version: str = "1.0.0",
) -> ModuleDescriptor:
    router = APIRouter(tags=[name])
    endpoints = {c.path: f"/api/{name}/{c.path}" for c in collections}

    @router.get("")
    async def module_info() -> dict[str, Any]:
        return {
            "success": True,
            "message": f"{title} module is working!",
            "module": name,
            "version": version,
            "endpoints": endpoints,
        }

    for spec in collections:
        router.include_router(build_collection_router(spec))

    return ModuleDescriptor(router=router, name=name, version=version, description=description)
