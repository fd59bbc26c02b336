"""
tenant_platform.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity.
    """

    subject: str
    roles: frozenset[str]
    name: str | None = None

    @property
    def is_admin(self) -> bool:
        return bool({"admin", "super_admin"} & self.roles)

    @property
    def display_name(self) -> str:
        return self.name or self.subject

    def has_any(self, *roles: str) -> bool:
        return self.is_admin or bool(self.roles.intersection(roles))
