from __future__ import annotations

from typing import Protocol

from wellness.models.favorite import Favorite


class FavoriteRepo(Protocol):
    async def list_for_user(
        self, user_id: int, entity_type: str | None = None
    ) -> list[Favorite]: ...
    async def add(self, favorite: Favorite) -> bool: ...
    async def remove(self, favorite: Favorite) -> bool: ...


class InMemoryFavoriteRepo:
    def __init__(self) -> None:
        # dict preserves insertion order, so listings come back oldest first.
        self._store: dict[Favorite, None] = {}

    def clear(self) -> None:
        self._store.clear()

    async def list_for_user(
        self, user_id: int, entity_type: str | None = None
    ) -> list[Favorite]:
        return [
            f
            for f in self._store
            if f.user_id == user_id
            and (entity_type is None or f.entity_type == entity_type)
        ]

    async def add(self, favorite: Favorite) -> bool:
        """Returns False when the favorite already existed."""
        if favorite in self._store:
            return False
        self._store[favorite] = None
        return True

    async def remove(self, favorite: Favorite) -> bool:
        if favorite not in self._store:
            return False
        del self._store[favorite]
        return True
