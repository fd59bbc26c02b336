"""
tests.test_modules

Module registry behavior and the tenant-scoped document collections.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import APIRouter

from tenant_platform.errors import ModuleRegistrationError
from tenant_platform.modules.registry import ModuleDescriptor, ModuleRegistry


def test_registry_keeps_registration_order_and_defaults() -> None:
    registry = ModuleRegistry()
    registry.register(ModuleDescriptor(router=APIRouter(), name="zeta"))
    registry.register(
        ModuleDescriptor(router=APIRouter(), name="alpha", version="2.0.0", description="A")
    )

    assert registry.info() == [
        {"name": "zeta", "version": "1.0.0", "description": "No description available"},
        {"name": "alpha", "version": "2.0.0", "description": "A"},
    ]
    assert "alpha" in registry
    assert registry.get("missing") is None
    assert len(registry) == 2


def test_registry_rejects_duplicate_names() -> None:
    registry = ModuleRegistry()
    registry.register(ModuleDescriptor(router=APIRouter(), name="hotels"))
    with pytest.raises(ModuleRegistrationError):
        registry.register(ModuleDescriptor(router=APIRouter(), name="hotels"))


def test_default_registry_describes_business_modules() -> None:
    registry = ModuleRegistry.with_defaults()
    weddings = registry.get("weddings")
    assert weddings is not None
    assert weddings.description == (
        "Wedding module for venue management, vendor services, and event planning"
    )


@pytest.mark.asyncio
async def test_module_info_route(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/automobiles")
    assert r.status_code == 200
    body = r.json()
    assert body["module"] == "automobiles"
    assert body["message"] == "Automobiles module is working!"
    assert body["endpoints"] == {"vehicles": "/api/automobiles/vehicles"}


@pytest.mark.asyncio
async def test_vehicle_crud_roundtrip(client: httpx.AsyncClient, auth) -> None:
    editor = auth("dealer-1", "editor")

    r = await client.post(
        "/api/automobiles/vehicles",
        json={"make": "Toyota", "model": "Corolla", "year": 2021, "color": "blue"},
        headers=editor,
    )
    assert r.status_code == 201
    created = r.json()["data"]
    assert created["make"] == "Toyota"
    assert created["attributes"] == {"year": 2021, "color": "blue"}
    assert created["tenant"] == "public"
    vehicle_id = created["id"]

    r = await client.get(f"/api/automobiles/vehicles/{vehicle_id}")
    assert r.status_code == 200
    assert r.json()["data"]["model"] == "Corolla"

    r = await client.patch(
        f"/api/automobiles/vehicles/{vehicle_id}",
        json={"model": "Camry", "color": "red", "mileage": 1200},
        headers=editor,
    )
    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["make"] == "Toyota"
    assert updated["model"] == "Camry"
    assert updated["attributes"] == {"year": 2021, "color": "red", "mileage": 1200}

    r = await client.delete(f"/api/automobiles/vehicles/{vehicle_id}", headers=editor)
    assert r.status_code == 204

    r = await client.get(f"/api/automobiles/vehicles/{vehicle_id}")
    assert r.status_code == 404
    assert r.json()["message"] == "Vehicle not found"


@pytest.mark.asyncio
async def test_writes_require_editor_role(client: httpx.AsyncClient, auth) -> None:
    payload = {"name": "Catering", "description": "Full-service catering"}

    r = await client.post("/api/business/services", json=payload)
    assert r.status_code == 401

    r = await client.post("/api/business/services", json=payload, headers=auth("guest"))
    assert r.status_code == 403

    r = await client.post("/api/business/services", json=payload, headers=auth("root", "admin"))
    assert r.status_code == 201


@pytest.mark.asyncio
async def test_declared_fields_are_validated(client: httpx.AsyncClient, auth) -> None:
    editor = auth("planner", "editor")

    r = await client.post("/api/weddings/venues", json={"name": "Hall"}, headers=editor)
    assert r.status_code == 422
    assert r.json()["message"] == "Validation failed"

    r = await client.post(
        "/api/weddings/venues", json={"name": "Hall", "capacity": 0}, headers=editor
    )
    assert r.status_code == 422

    r = await client.post(
        "/api/hotels/rooms", json={"room_number": "101", "type": ""}, headers=editor
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_documents_are_isolated_per_tenant(client: httpx.AsyncClient, auth) -> None:
    editor = auth("owner", "editor")
    acme = {"X-Tenant-Slug": "acme"}
    globex = {"X-Tenant-Slug": "globex"}

    r = await client.post(
        "/api/ecommerce/products", json={"name": "Anvil"}, headers={**editor, **acme}
    )
    assert r.status_code == 201
    product_id = r.json()["data"]["id"]
    assert r.json()["data"]["tenant"] == "acme"

    r = await client.get("/api/ecommerce/products", headers=globex)
    assert r.json()["data"] == []

    r = await client.get(f"/api/ecommerce/products/{product_id}", headers=globex)
    assert r.status_code == 404

    r = await client.delete(
        f"/api/ecommerce/products/{product_id}", headers={**editor, **globex}
    )
    assert r.status_code == 404

    r = await client.get(f"/api/ecommerce/products/{product_id}", headers=acme)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_tenant_resolved_from_subdomain(client: httpx.AsyncClient, auth) -> None:
    r = await client.post(
        "/api/ecommerce/products",
        json={"name": "Rocket"},
        headers={**auth("owner", "editor"), "Host": "acme.example.com"},
    )
    assert r.status_code == 201
    assert r.json()["data"]["tenant"] == "acme"


@pytest.mark.asyncio
async def test_collection_pagination(client: httpx.AsyncClient, auth) -> None:
    editor = auth("hotelier", "editor")
    for n in range(3):
        r = await client.post(
            "/api/hotels/rooms",
            json={"room_number": f"10{n}", "type": "double"},
            headers=editor,
        )
        assert r.status_code == 201

    r = await client.get("/api/hotels/rooms", params={"page": 2, "limit": 2})
    assert r.status_code == 200
    body = r.json()
    assert len(body["data"]) == 1
    assert body["pagination"] == {
        "current_page": 2,
        "total_pages": 2,
        "total_items": 3,
        "items_per_page": 2,
        "has_next_page": False,
        "has_prev_page": True,
    }

    r = await client.get("/api/hotels/rooms", params={"limit": 3})
    assert [d["room_number"] for d in r.json()["data"]] == ["102", "101", "100"]

    r = await client.get("/api/hotels/rooms", params={"limit": 101})
    assert r.status_code == 422
