from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from wellness.models.review import Reaction


class ReactionRepo(Protocol):
    async def list_for_reviews(
        self, review_ids: Iterable[int]
    ) -> dict[int, list[Reaction]]: ...
    async def set(self, review_id: int, user_id: int, kind: str) -> Reaction: ...
    async def clear(self, review_id: int, user_id: int) -> bool: ...


class InMemoryReactionRepo:
    """Keyed by (review_id, user_id): one reaction per user per review."""

    def __init__(self) -> None:
        self._store: dict[tuple[int, int], Reaction] = {}

    def clear_all(self) -> None:
        self._store.clear()

    async def list_for_reviews(
        self, review_ids: Iterable[int]
    ) -> dict[int, list[Reaction]]:
        grouped: dict[int, list[Reaction]] = {rid: [] for rid in review_ids}
        for (review_id, _user_id), reaction in self._store.items():
            if review_id in grouped:
                grouped[review_id].append(reaction)
        return grouped

    async def set(self, review_id: int, user_id: int, kind: str) -> Reaction:
        reaction = Reaction(review_id=review_id, user_id=user_id, kind=kind)
        self._store[(review_id, user_id)] = reaction
        return reaction

    async def clear(self, review_id: int, user_id: int) -> bool:
        return self._store.pop((review_id, user_id), None) is not None
