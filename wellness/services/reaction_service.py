"""The requester's like/dislike state on a review.

Only already-fetched reactions are accepted here.  Loading them is the
repository's job (ReactionRepo.list_for_reviews), done once per page of
reviews rather than once per review.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable

from wellness.core.metrics import PROJECTION_SKIPPED_RECORDS
from wellness.models.identity import Identity
from wellness.models.review import Reaction

logger = logging.getLogger(__name__)


class ReactionState(enum.Enum):
    LIKED = "liked"
    DISLIKED = "disliked"
    # Guests and users without a reaction both land here.
    NONE = "none"

    @property
    def is_liked(self) -> bool | None:
        """Wire value of the review's ``isLiked`` field."""
        if self is ReactionState.LIKED:
            return True
        if self is ReactionState.DISLIKED:
            return False
        return None


_STATE_BY_KIND = {
    "like": ReactionState.LIKED,
    "dislike": ReactionState.DISLIKED,
}


def resolve_reaction(
    identity: Identity | None, reactions: Iterable[Reaction]
) -> ReactionState:
    """Return the requester's reaction among *reactions*.

    One reaction per (review, user) is enforced upstream.  If that is
    ever violated, the first match in iteration order wins.
    """
    if identity is None:
        return ReactionState.NONE

    for reaction in reactions:
        if reaction.user_id != identity.user_id:
            continue
        state = _STATE_BY_KIND.get(reaction.kind)
        if state is None:
            _skip(reaction)
            continue
        return state

    return ReactionState.NONE


def count_reactions(reactions: Iterable[Reaction]) -> tuple[int, int]:
    """Return (likes, dislikes)."""
    likes = 0
    dislikes = 0
    for reaction in reactions:
        if reaction.kind == "like":
            likes += 1
        elif reaction.kind == "dislike":
            dislikes += 1
        else:
            _skip(reaction)
    return likes, dislikes


def _skip(reaction: Reaction) -> None:
    logger.warning(
        "Skipping reaction review=%s user=%s with unknown kind=%r",
        reaction.review_id,
        reaction.user_id,
        reaction.kind,
    )
    PROJECTION_SKIPPED_RECORDS.labels(record="reaction").inc()
