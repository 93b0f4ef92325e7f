from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

FavoriteType = Literal["remedy", "article", "course", "video"]

FAVORITE_TYPES: tuple[str, ...] = ("remedy", "article", "course", "video")


@dataclass(frozen=True, slots=True)
class Favorite:
    """Presence-only marker: the user favorited (entity_type, entity_id)."""

    user_id: int
    entity_type: str
    entity_id: int
