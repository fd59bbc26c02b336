"""
tests.test_smoke_script

Smoke checker against a mocked transport.
"""

from __future__ import annotations

import httpx
import pytest

from tenant_platform import smoke
from tenant_platform.smoke import SmokeCheck, default_checks, run_check, run_checks

BASE_URL = "http://platform.test/api"


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_default_checks_cover_health_and_reviews() -> None:
    paths = [c.path for c in default_checks("abc")]
    assert paths == [
        "/health",
        "",
        "/reviews/target/Vendor/abc/stats",
        "/reviews/target/Vendor/abc",
    ]


def test_pass_and_fail_outcomes() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        if request.url.path == "/api/health":
            return httpx.Response(200, json={"status": "healthy"})
        return httpx.Response(500, text="boom")

    with _client(handler) as client:
        ok = run_check(client, BASE_URL + "/", SmokeCheck("Health", "/health"))
        bad = run_check(client, BASE_URL, SmokeCheck("Info", ""))

    assert seen == ["http://platform.test/api/health", "http://platform.test/api"]
    assert ok.passed and ok.status_code == 200
    assert bad.outcome == "fail"
    assert bad.status_code == 500
    assert bad.detail == "boom"


def test_transport_errors_are_reported() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        result = run_check(client, BASE_URL, SmokeCheck("Health", "/health"))

    assert result.outcome == "error"
    assert result.status_code is None
    assert "connection refused" in result.detail


def test_delay_between_checks() -> None:
    pauses: list[float] = []
    checks = [SmokeCheck("a", "/a"), SmokeCheck("b", "/b"), SmokeCheck("c", "/c")]

    with _client(lambda request: httpx.Response(200)) as client:
        results = run_checks(client, BASE_URL, checks, delay=0.5, sleep=pauses.append)

    assert [r.passed for r in results] == [True, True, True]
    assert pauses == [0.5, 0.5]


def _route_clients_through(monkeypatch: pytest.MonkeyPatch, handler) -> None:
    real_client = httpx.Client

    def client_factory(**kwargs) -> httpx.Client:
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(smoke.httpx, "Client", client_factory)


def test_main_exits_zero_when_all_checks_pass(monkeypatch: pytest.MonkeyPatch) -> None:
    _route_clients_through(monkeypatch, lambda request: httpx.Response(200, json={}))
    assert smoke.main(["--base-url", BASE_URL, "--delay", "0"]) == 0


def test_main_exits_one_on_any_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/stats"):
            return httpx.Response(503)
        return httpx.Response(200)

    _route_clients_through(monkeypatch, handler)
    assert smoke.main(["--base-url", BASE_URL, "--delay", "0"]) == 1
