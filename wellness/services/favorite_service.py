from __future__ import annotations

from collections.abc import Collection

from wellness.models.favorite import Favorite
from wellness.models.identity import Identity


def is_favorite(
    identity: Identity | None,
    entity_type: str,
    entity_id: int,
    favorites: Collection[Favorite],
) -> bool:
    """True iff the requester favorited exactly (entity_type, entity_id).

    Guests always get False.  *favorites* is whatever the caller loaded
    for this user; a set gives O(1) lookups, a list works too.
    """
    if identity is None:
        return False
    return Favorite(identity.user_id, entity_type, entity_id) in favorites
