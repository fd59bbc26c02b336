"""
tests.test_smoke

Service boots and serves the health, readiness and index endpoints.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy.exc import OperationalError

from tenant_platform.api.deps import db_session


@pytest.mark.asyncio
async def test_health_lists_loaded_modules(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["status"] == "healthy"
    assert body["environment"] == "test"
    assert body["uptime"] >= 0
    assert [m["name"] for m in body["modules"]] == [
        "automobiles",
        "business",
        "ecommerce",
        "hotels",
        "weddings",
    ]
    assert all(m["version"] == "1.0.0" for m in body["modules"])


@pytest.mark.asyncio
async def test_ready_checks_database(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/ready")
    assert r.status_code == 200
    assert r.json() == {"status": "ready"}


@pytest.mark.asyncio
async def test_api_index(client: httpx.AsyncClient) -> None:
    r = await client.get("/api")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["modules"]["weddings"] == "/api/weddings"
    assert body["health"] == "/api/health"


@pytest.mark.asyncio
async def test_unknown_route_uses_error_shape(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/does-not-exist")
    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "Route not found"
    assert body["path"] == "/api/does-not-exist"


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/health", headers={"x-request-id": "req-123"})
    assert r.headers["x-request-id"] == "req-123"

    r = await client.get("/api/health")
    assert r.headers["x-request-id"]


@pytest.mark.asyncio
async def test_invalid_tenant_header_rejected(client: httpx.AsyncClient) -> None:
    r = await client.get("/api/health", headers={"X-Tenant-Slug": "not a slug!"})
    assert r.status_code == 400
    assert r.json()["success"] is False


@pytest.mark.asyncio
async def test_unusable_host_label_falls_back_to_default_tenant(
    client: httpx.AsyncClient, auth
) -> None:
    r = await client.get("/api/health", headers={"Host": "my_shop.example.com"})
    assert r.status_code == 200

    r = await client.post(
        "/api/ecommerce/products",
        json={"name": "Kettle"},
        headers={**auth("owner", "editor"), "Host": "my_shop.example.com"},
    )
    assert r.status_code == 201
    assert r.json()["data"]["tenant"] == "public"


class _UnreachableSession:
    async def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, ConnectionRefusedError("db down"))


async def _unreachable_session():
    yield _UnreachableSession()


@pytest.mark.asyncio
async def test_ready_reports_database_outage(app: FastAPI, client: httpx.AsyncClient) -> None:
    app.dependency_overrides[db_session] = _unreachable_session

    r = await client.get("/api/ready")
    assert r.status_code == 503
    assert r.json() == {
        "success": False,
        "message": "Database connection error",
        "path": "/api/ready",
    }


@pytest.mark.asyncio
async def test_unexpected_error_keeps_envelope_and_request_id(
    app: FastAPI, client: httpx.AsyncClient
) -> None:
    async def explode() -> None:
        raise RuntimeError("kaboom")

    app.add_api_route("/api/explode", explode)

    r = await client.get("/api/explode", headers={"x-request-id": "req-500"})
    assert r.status_code == 500
    assert r.headers["x-request-id"] == "req-500"
    assert r.json() == {
        "success": False,
        "message": "Internal server error",
        "path": "/api/explode",
    }
