"""Fetch the related data a view needs, wrapped as Relations.

Routers call these before handing everything to the view assembler;
the assembler itself never reaches a repository.
"""

from __future__ import annotations

import datetime
from collections.abc import Collection

from wellness.models.favorite import Favorite
from wellness.models.identity import Identity
from wellness.models.relation import Loaded
from wellness.models.review import Reaction, Review
from wellness.repos.bundle import RepoBundle


def now() -> int:
    return int(datetime.datetime.now(datetime.UTC).timestamp())


async def load_favorites(
    repos: RepoBundle, identity: Identity | None, entity_type: str
) -> Loaded[Collection[Favorite]]:
    """The requester's favorites of one type (empty for guests)."""
    if identity is None:
        return Loaded(frozenset())
    favorites = await repos.favorites.list_for_user(identity.user_id, entity_type)
    return Loaded(frozenset(favorites))


async def load_reviews(
    repos: RepoBundle, subject_type: str, subject_id: int, preview_limit: int
) -> tuple[Loaded[list[Review]], Loaded[dict[int, list[Reaction]]]]:
    """Accepted reviews for a subject plus reactions for the preview slice."""
    reviews = await repos.reviews.list_for_subject(subject_type, subject_id)
    preview_ids = [r.id for r in reviews[:preview_limit]]
    reactions = await repos.reactions.list_for_reviews(preview_ids)
    return Loaded(reviews), Loaded(reactions)
