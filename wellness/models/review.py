from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

SubjectType = Literal["remedy", "course", "video"]
ReviewStatus = Literal["pending", "accepted", "rejected"]
ReactionKind = Literal["like", "dislike"]

SUBJECT_TYPES: tuple[str, ...] = ("remedy", "course", "video")
REVIEW_STATUSES: tuple[str, ...] = ("pending", "accepted", "rejected")
REACTION_KINDS: tuple[str, ...] = ("like", "dislike")

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True, slots=True)
class Review:
    id: int
    author_id: int
    subject_type: str  # remedy|course|video
    subject_id: int
    rating: int
    message: str = ""
    status: str = "pending"  # pending|accepted|rejected
    created_at: int | None = None
    updated_at: int | None = None


@dataclass(frozen=True, slots=True)
class Reaction:
    """One user's like/dislike on a review.

    At most one per (review_id, user_id); the repository enforces it.
    """

    review_id: int
    user_id: int
    kind: str  # like|dislike
