"""SQL implementation of CatalogRepo."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from wellness.db.tables import ArticleRow, CourseRow, LessonRow, RemedyRow, VideoRow
from wellness.models.content import Article, Remedy, Video
from wellness.models.course import Course, Lesson


class PgCatalogRepo:
    """Satisfies the CatalogRepo Protocol using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_courses(self) -> list[Course]:
        stmt = select(CourseRow).where(CourseRow.status == "active").order_by(
            CourseRow.id
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_course(r) for r in rows]

    async def get_course(self, course_id: int) -> Course | None:
        row = await self._session.get(CourseRow, course_id)
        return _row_to_course(row) if row is not None else None

    async def list_lessons(self, course_id: int) -> list[Lesson]:
        stmt = (
            select(LessonRow)
            .where(LessonRow.course_id == course_id, LessonRow.status == "active")
            .order_by(LessonRow.order, LessonRow.id)
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_lesson(r) for r in rows]

    async def list_remedies(self) -> list[Remedy]:
        stmt = select(RemedyRow).where(RemedyRow.status == "active").order_by(
            RemedyRow.id
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_remedy(r) for r in rows]

    async def get_remedy(self, remedy_id: int) -> Remedy | None:
        row = await self._session.get(RemedyRow, remedy_id)
        return _row_to_remedy(row) if row is not None else None

    async def list_videos(self) -> list[Video]:
        stmt = select(VideoRow).where(VideoRow.status == "active").order_by(
            VideoRow.id
        )
        rows = (await self._session.execute(stmt)).scalars().all()
        return [_row_to_video(r) for r in rows]

    async def get_video(self, video_id: int) -> Video | None:
        row = await self._session.get(VideoRow, video_id)
        return _row_to_video(row) if row is not None else None

    async def get_article(self, article_id: int) -> Article | None:
        row = await self._session.get(ArticleRow, article_id)
        if row is None:
            return None
        return Article(
            id=row.id,
            title=row.title,
            description=row.description,
            image=row.image,
            content=row.content,
            status=row.status,
        )

    async def add_course(self, course: Course) -> None:
        self._session.add(
            CourseRow(
                id=course.id,
                title=course.title,
                description=course.description,
                image=course.image,
                duration=course.duration,
                price=course.price,
                overview=course.overview,
                status=course.status,
            )
        )
        await self._session.flush()

    async def add_lesson(self, lesson: Lesson) -> None:
        self._session.add(
            LessonRow(
                id=lesson.id,
                course_id=lesson.course_id,
                order=lesson.order,
                title=lesson.title,
                description=lesson.description,
                image=lesson.image,
                status=lesson.status,
            )
        )
        await self._session.flush()

    async def add_remedy(self, remedy: Remedy) -> None:
        self._session.add(
            RemedyRow(
                id=remedy.id,
                title=remedy.title,
                description=remedy.description,
                main_image_url=remedy.main_image_url,
                ingredients=remedy.ingredients,
                instructions=remedy.instructions,
                benefits=remedy.benefits,
                precautions=remedy.precautions,
                product_link=remedy.product_link,
                status=remedy.status,
            )
        )
        await self._session.flush()

    async def add_video(self, video: Video) -> None:
        self._session.add(
            VideoRow(
                id=video.id,
                title=video.title,
                description=video.description,
                image=video.image,
                video_link=video.video_link,
                ingredients=video.ingredients,
                instructions=video.instructions,
                benefits=video.benefits,
                status=video.status,
            )
        )
        await self._session.flush()

    async def add_article(self, article: Article) -> None:
        self._session.add(
            ArticleRow(
                id=article.id,
                title=article.title,
                description=article.description,
                image=article.image,
                content=article.content,
                status=article.status,
            )
        )
        await self._session.flush()


def _row_to_course(row: CourseRow) -> Course:
    return Course(
        id=row.id,
        title=row.title,
        description=row.description or "",
        image=row.image,
        duration=row.duration,
        price=row.price,
        overview=row.overview,
        status=row.status,
    )


def _row_to_lesson(row: LessonRow) -> Lesson:
    return Lesson(
        id=row.id,
        course_id=row.course_id,
        order=row.order,
        title=row.title,
        description=row.description or "",
        image=row.image,
        status=row.status,
    )


def _row_to_remedy(row: RemedyRow) -> Remedy:
    return Remedy(
        id=row.id,
        title=row.title,
        description=row.description or "",
        main_image_url=row.main_image_url,
        ingredients=row.ingredients,
        instructions=row.instructions,
        benefits=row.benefits,
        precautions=row.precautions,
        product_link=row.product_link,
        status=row.status,
    )


def _row_to_video(row: VideoRow) -> Video:
    return Video(
        id=row.id,
        title=row.title,
        description=row.description or "",
        image=row.image,
        video_link=row.video_link,
        ingredients=row.ingredients,
        instructions=row.instructions,
        benefits=row.benefits,
        status=row.status,
    )
