"""
tests.test_tenancy

Tenant slug resolution from headers and hosts.
"""

from __future__ import annotations

import pytest

from tenant_platform.errors import BadRequestError
from tenant_platform.tenancy import normalize_slug, resolve_tenant, subdomain_of


@pytest.mark.parametrize(
    ("host", "expected"),
    [
        ("acme.example.com", "acme"),
        ("Acme.example.com:8080", "acme"),
        ("shop.localhost", "shop"),
        ("www.example.com", None),
        ("api.example.com", None),
        ("my_shop.example.com", None),
        ("localhost", None),
        ("localhost:8080", None),
        ("127.0.0.1", None),
        ("", None),
        (None, None),
    ],
)
def test_subdomain_of(host: str | None, expected: str | None) -> None:
    assert subdomain_of(host) == expected


def test_header_wins_over_host() -> None:
    assert resolve_tenant(header=" Globex ", host="acme.example.com", default="public") == "globex"


def test_falls_back_to_default() -> None:
    assert resolve_tenant(header=None, host="localhost:8080", default="public") == "public"


@pytest.mark.parametrize("raw", ["", "has space", "under_score", "x" * 64])
def test_invalid_slugs_rejected(raw: str) -> None:
    with pytest.raises(BadRequestError):
        normalize_slug(raw)


def test_unusable_host_label_uses_default() -> None:
    assert resolve_tenant(header=None, host="my_shop.example.com", default="public") == "public"
