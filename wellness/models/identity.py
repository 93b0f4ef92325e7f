from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Identity:
    """The requester, resolved once per request from the bearer token.

    Projections take an ``Identity | None``; ``None`` is a guest.
    """

    user_id: int
    roles: frozenset[str] = frozenset()

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def is_admin(self) -> bool:
        return "admin" in self.roles
