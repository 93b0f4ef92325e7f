from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from typing import Protocol

from wellness.models.review import Review


class ReviewRepo(Protocol):
    async def get(self, review_id: int) -> Review | None: ...
    async def list_for_subject(
        self, subject_type: str, subject_id: int, *, status: str = "accepted"
    ) -> list[Review]: ...
    async def list_for_subjects(
        self, subject_type: str, subject_ids: Iterable[int], *, status: str = "accepted"
    ) -> dict[int, list[Review]]: ...
    async def add(
        self,
        *,
        author_id: int,
        subject_type: str,
        subject_id: int,
        rating: int,
        message: str,
        created_at: int,
    ) -> Review: ...
    async def set_status(
        self, review_id: int, status: str, updated_at: int
    ) -> Review | None: ...


def _newest_first(review: Review) -> tuple[int, int]:
    return (-(review.created_at or 0), -review.id)


class InMemoryReviewRepo:
    def __init__(self) -> None:
        self._store: dict[int, Review] = {}

    def clear(self) -> None:
        self._store.clear()

    async def get(self, review_id: int) -> Review | None:
        return self._store.get(review_id)

    async def list_for_subject(
        self, subject_type: str, subject_id: int, *, status: str = "accepted"
    ) -> list[Review]:
        matches = [
            r
            for r in self._store.values()
            if r.subject_type == subject_type
            and r.subject_id == subject_id
            and r.status == status
        ]
        return sorted(matches, key=_newest_first)

    async def list_for_subjects(
        self, subject_type: str, subject_ids: Iterable[int], *, status: str = "accepted"
    ) -> dict[int, list[Review]]:
        grouped: dict[int, list[Review]] = {sid: [] for sid in subject_ids}
        for review in sorted(self._store.values(), key=_newest_first):
            if (
                review.subject_type == subject_type
                and review.subject_id in grouped
                and review.status == status
            ):
                grouped[review.subject_id].append(review)
        return grouped

    async def add(
        self,
        *,
        author_id: int,
        subject_type: str,
        subject_id: int,
        rating: int,
        message: str,
        created_at: int,
    ) -> Review:
        review = Review(
            id=max(self._store, default=0) + 1,
            author_id=author_id,
            subject_type=subject_type,
            subject_id=subject_id,
            rating=rating,
            message=message,
            status="pending",
            created_at=created_at,
            updated_at=created_at,
        )
        self._store[review.id] = review
        return review

    def put(self, review: Review) -> None:
        """Store a fully-formed review as-is (seeding and tests)."""
        self._store[review.id] = review

    async def set_status(
        self, review_id: int, status: str, updated_at: int
    ) -> Review | None:
        review = self._store.get(review_id)
        if review is None:
            return None
        updated = replace(review, status=status, updated_at=updated_at)
        self._store[review_id] = updated
        return updated
