"""Review listing, submission, reactions and moderation.

Only accepted reviews are listed or counted toward a subject's rating.
New submissions start as pending until an admin accepts them.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from wellness.api.dependencies import (
    CurrentIdentity,
    Repos,
    require_identity,
    require_role,
)
from wellness.api.loaders import now
from wellness.core.metrics import REVIEW_REACTIONS
from wellness.models.identity import Identity
from wellness.models.relation import Loaded
from wellness.models.review import (
    MAX_RATING,
    MIN_RATING,
    ReactionKind,
    Review,
    ReviewStatus,
    SubjectType,
)
from wellness.repos.bundle import RepoBundle
from wellness.services.rating_service import aggregate_ratings
from wellness.services.view_assembler import review_view, reviews_view

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/reviews", tags=["reviews"])


class ReviewIn(BaseModel):
    type: SubjectType
    element_id: int
    rate: int = Field(ge=MIN_RATING, le=MAX_RATING)
    message: str = Field(default="", max_length=2000)


class ReactionIn(BaseModel):
    reaction_type: ReactionKind


class ReviewStatusIn(BaseModel):
    status: ReviewStatus


async def _subject_exists(repos: RepoBundle, subject_type: str, subject_id: int) -> bool:
    """True for an active course, remedy or video."""
    if subject_type == "course":
        subject: Any = await repos.catalog.get_course(subject_id)
    elif subject_type == "remedy":
        subject = await repos.catalog.get_remedy(subject_id)
    else:
        subject = await repos.catalog.get_video(subject_id)
    return subject is not None and subject.status == "active"


async def _get_public_review_or_404(repos: RepoBundle, review_id: int) -> Review:
    # Pending and rejected reviews are only visible to moderators.
    review = await repos.reviews.get(review_id)
    if review is None or review.status != "accepted":
        raise HTTPException(status_code=404, detail="review not found")
    return review


async def _review_with_reactions(
    repos: RepoBundle, review: Review, identity: Identity | None
) -> dict[str, Any]:
    reactions = await repos.reactions.list_for_reviews([review.id])
    return review_view(review, identity, Loaded(reactions.get(review.id, [])))


@router.get("")
async def list_reviews(
    identity: CurrentIdentity,
    repos: Repos,
    type: Annotated[SubjectType, Query()],
    element_id: Annotated[int, Query()],
) -> dict[str, Any]:
    reviews = await repos.reviews.list_for_subject(type, element_id)
    reactions = await repos.reactions.list_for_reviews([r.id for r in reviews])
    summary = aggregate_ratings(reviews)
    return {
        "reviews": reviews_view(reviews, identity, Loaded(reactions)),
        "average_rating": summary.average_rating,
        "review_count": summary.review_count,
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def submit_review(
    payload: ReviewIn,
    identity: Annotated[Identity, Depends(require_identity)],
    repos: Repos,
) -> dict[str, Any]:
    if not await _subject_exists(repos, payload.type, payload.element_id):
        raise HTTPException(status_code=404, detail=f"{payload.type} not found")

    review = await repos.reviews.add(
        author_id=identity.user_id,
        subject_type=payload.type,
        subject_id=payload.element_id,
        rating=payload.rate,
        message=payload.message,
        created_at=now(),
    )
    logger.info(
        "Review submitted id=%s user=%s subject=%s:%s rate=%d",
        review.id,
        identity.user_id,
        review.subject_type,
        review.subject_id,
        review.rating,
    )
    return review_view(review, identity, Loaded([]))


@router.put("/{review_id}/reaction")
async def set_reaction(
    review_id: int,
    payload: ReactionIn,
    identity: Annotated[Identity, Depends(require_identity)],
    repos: Repos,
) -> dict[str, Any]:
    review = await _get_public_review_or_404(repos, review_id)
    await repos.reactions.set(review.id, identity.user_id, payload.reaction_type)
    REVIEW_REACTIONS.labels(kind=payload.reaction_type).inc()
    return await _review_with_reactions(repos, review, identity)


@router.delete("/{review_id}/reaction")
async def clear_reaction(
    review_id: int,
    identity: Annotated[Identity, Depends(require_identity)],
    repos: Repos,
) -> dict[str, Any]:
    review = await _get_public_review_or_404(repos, review_id)
    if await repos.reactions.clear(review.id, identity.user_id):
        REVIEW_REACTIONS.labels(kind="cleared").inc()
    return await _review_with_reactions(repos, review, identity)


@router.patch("/{review_id}/status")
async def set_review_status(
    review_id: int,
    payload: ReviewStatusIn,
    admin: Annotated[Identity, Depends(require_role("admin"))],
    repos: Repos,
) -> dict[str, Any]:
    review = await repos.reviews.set_status(review_id, payload.status, now())
    if review is None:
        raise HTTPException(status_code=404, detail="review not found")
    logger.info(
        "Review moderated id=%s status=%s by admin=%s",
        review.id,
        review.status,
        admin.user_id,
    )
    return await _review_with_reactions(repos, review, admin)
