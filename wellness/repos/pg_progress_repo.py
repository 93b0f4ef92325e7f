"""SQL implementation of ProgressRepo."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wellness.db.tables import LessonProgressRow
from wellness.models.course import LessonProgress


class PgProgressRepo:
    """Satisfies the ProgressRepo Protocol using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_course(
        self, user_id: int, course_id: int
    ) -> list[LessonProgress]:
        stmt = select(LessonProgressRow).where(
            LessonProgressRow.user_id == user_id,
            LessonProgressRow.course_id == course_id,
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_progress(r) for r in rows]

    async def list_course_ids(self, user_id: int) -> list[int]:
        stmt = (
            select(LessonProgressRow.course_id)
            .where(LessonProgressRow.user_id == user_id)
            .group_by(LessonProgressRow.course_id)
            .order_by(LessonProgressRow.course_id)
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def start_lesson(
        self, user_id: int, course_id: int, lesson_id: int, at: int
    ) -> LessonProgress:
        row = await self._find(user_id, lesson_id)
        if row is None:
            row = LessonProgressRow(
                user_id=user_id,
                course_id=course_id,
                lesson_id=lesson_id,
                status="in_progress",
                started_at=at,
            )
            self._session.add(row)
        elif row.status != "completed":
            row.status = "in_progress"
            row.started_at = row.started_at or at
        await self._session.flush()
        return _row_to_progress(row)

    async def complete_lesson(
        self, user_id: int, course_id: int, lesson_id: int, at: int
    ) -> LessonProgress:
        row = await self._find(user_id, lesson_id)
        if row is None:
            row = LessonProgressRow(
                user_id=user_id,
                course_id=course_id,
                lesson_id=lesson_id,
                status="completed",
                started_at=at,
                completed_at=at,
            )
            self._session.add(row)
        elif row.status != "completed":
            row.status = "completed"
            row.started_at = row.started_at or at
            row.completed_at = at
        await self._session.flush()
        return _row_to_progress(row)

    async def _find(self, user_id: int, lesson_id: int) -> LessonProgressRow | None:
        stmt = select(LessonProgressRow).where(
            LessonProgressRow.user_id == user_id,
            LessonProgressRow.lesson_id == lesson_id,
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()


def _row_to_progress(row: LessonProgressRow) -> LessonProgress:
    return LessonProgress(
        user_id=row.user_id,
        course_id=row.course_id,
        lesson_id=row.lesson_id,
        status=row.status,
        started_at=row.started_at,
        completed_at=row.completed_at,
    )
