"""
tenant_platform.tenancy

Tenant slug resolution.

Responsibilities:
- Derive the tenant slug for a request from the `X-Tenant-Slug` header or the
  host's subdomain, falling back to the configured default tenant.
- Validate slugs so they are safe to store and log.
"""

from __future__ import annotations

import re

from tenant_platform.errors import BadRequestError

TENANT_HEADER = "x-tenant-slug"

# Hosts starting with these labels belong to the platform itself, not a tenant.
RESERVED_SUBDOMAINS = frozenset({"www", "api", "admin", "app", "dashboard"})

_SLUG_RE = re.compile(r"^[a-z0-9-]{1,63}$")


def normalize_slug(raw: str) -> str:
    slug = raw.strip().lower()
    if not _SLUG_RE.match(slug):
        raise BadRequestError(f"Invalid tenant slug: {raw!r}")
    return slug


def subdomain_of(host: str | None) -> str | None:
    """
    Return the first label of `host` when it names a tenant.

    `shop.example.com` -> `shop`; `localhost`, `127.0.0.1` and reserved
    labels such as `www.example.com` -> None. Labels that are not valid slugs
    (`my_shop.example.com`) are ignored as well.
    """
    if not host:
        return None
    hostname = host.split(":", 1)[0]
    labels = hostname.split(".")
    if len(labels) < 2 or all(label.isdigit() for label in labels):
        return None
    first = labels[0].lower()
    # Only the header may reject a request; an unusable host label is ignored.
    if first in RESERVED_SUBDOMAINS or not _SLUG_RE.match(first):
        return None
    return first


def resolve_tenant(*, header: str | None, host: str | None, default: str) -> str:
    # An explicit header always wins over the host.
    if header:
        return normalize_slug(header)
    sub = subdomain_of(host)
    if sub is not None:
        return normalize_slug(sub)
    return normalize_slug(default)
