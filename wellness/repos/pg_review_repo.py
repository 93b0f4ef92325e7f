"""SQL implementations of ReviewRepo and ReactionRepo."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from wellness.db.tables import ReviewReactionRow, ReviewRow
from wellness.models.review import Reaction, Review


class PgReviewRepo:
    """Satisfies the ReviewRepo Protocol using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, review_id: int) -> Review | None:
        row = await self._session.get(ReviewRow, review_id)
        return _row_to_review(row) if row is not None else None

    async def list_for_subject(
        self, subject_type: str, subject_id: int, *, status: str = "accepted"
    ) -> list[Review]:
        stmt = (
            select(ReviewRow)
            .where(
                ReviewRow.type == subject_type,
                ReviewRow.element_id == subject_id,
                ReviewRow.status == status,
            )
            .order_by(ReviewRow.created_at.desc(), ReviewRow.id.desc())
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_review(r) for r in rows]

    async def list_for_subjects(
        self, subject_type: str, subject_ids: Iterable[int], *, status: str = "accepted"
    ) -> dict[int, list[Review]]:
        grouped: dict[int, list[Review]] = {sid: [] for sid in subject_ids}
        if not grouped:
            return grouped
        stmt = (
            select(ReviewRow)
            .where(
                ReviewRow.type == subject_type,
                ReviewRow.element_id.in_(list(grouped)),
                ReviewRow.status == status,
            )
            .order_by(ReviewRow.created_at.desc(), ReviewRow.id.desc())
        )
        for row in (await self._session.execute(stmt)).scalars():
            grouped[row.element_id].append(_row_to_review(row))
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
        row = ReviewRow(
            user_id=author_id,
            type=subject_type,
            element_id=subject_id,
            rate=rating,
            message=message,
            status="pending",
            created_at=created_at,
            updated_at=created_at,
        )
        self._session.add(row)
        await self._session.flush()
        return _row_to_review(row)

    async def set_status(
        self, review_id: int, status: str, updated_at: int
    ) -> Review | None:
        row = await self._session.get(ReviewRow, review_id)
        if row is None:
            return None
        row.status = status
        row.updated_at = updated_at
        await self._session.flush()
        return _row_to_review(row)


class PgReactionRepo:
    """Satisfies the ReactionRepo Protocol using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_reviews(
        self, review_ids: Iterable[int]
    ) -> dict[int, list[Reaction]]:
        grouped: dict[int, list[Reaction]] = {rid: [] for rid in review_ids}
        if not grouped:
            return grouped
        stmt = (
            select(ReviewReactionRow)
            .where(ReviewReactionRow.review_id.in_(list(grouped)))
            .order_by(ReviewReactionRow.id)
        )
        for row in (await self._session.execute(stmt)).scalars():
            grouped[row.review_id].append(
                Reaction(
                    review_id=row.review_id,
                    user_id=row.user_id,
                    kind=row.reaction_type,
                )
            )
        return grouped

    async def set(self, review_id: int, user_id: int, kind: str) -> Reaction:
        stmt = select(ReviewReactionRow).where(
            ReviewReactionRow.review_id == review_id,
            ReviewReactionRow.user_id == user_id,
        )
        row = (await self._session.execute(stmt)).scalar_one_or_none()
        if row is None:
            row = ReviewReactionRow(
                review_id=review_id, user_id=user_id, reaction_type=kind
            )
            self._session.add(row)
        else:
            row.reaction_type = kind
        await self._session.flush()
        return Reaction(review_id=review_id, user_id=user_id, kind=kind)

    async def clear(self, review_id: int, user_id: int) -> bool:
        stmt = delete(ReviewReactionRow).where(
            ReviewReactionRow.review_id == review_id,
            ReviewReactionRow.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)


def _row_to_review(row: ReviewRow) -> Review:
    return Review(
        id=row.id,
        author_id=row.user_id,
        subject_type=row.type,
        subject_id=row.element_id,
        rating=row.rate,
        message=row.message or "",
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
