from __future__ import annotations

from typing import Protocol

from wellness.models.content import Article, Remedy, Video
from wellness.models.course import Course, Lesson


class CatalogRepo(Protocol):
    async def list_courses(self) -> list[Course]: ...
    async def get_course(self, course_id: int) -> Course | None: ...
    async def list_lessons(self, course_id: int) -> list[Lesson]: ...
    async def list_remedies(self) -> list[Remedy]: ...
    async def get_remedy(self, remedy_id: int) -> Remedy | None: ...
    async def list_videos(self) -> list[Video]: ...
    async def get_video(self, video_id: int) -> Video | None: ...
    async def get_article(self, article_id: int) -> Article | None: ...
    async def add_course(self, course: Course) -> None: ...
    async def add_lesson(self, lesson: Lesson) -> None: ...
    async def add_remedy(self, remedy: Remedy) -> None: ...
    async def add_video(self, video: Video) -> None: ...
    async def add_article(self, article: Article) -> None: ...


def _lesson_sort_key(lesson: Lesson) -> tuple[int, int]:
    return (lesson.order, lesson.id)


class InMemoryCatalogRepo:
    """Catalog content held in dicts.  Only active items are listed."""

    def __init__(self) -> None:
        self._courses: dict[int, Course] = {}
        self._lessons: dict[int, Lesson] = {}
        self._remedies: dict[int, Remedy] = {}
        self._videos: dict[int, Video] = {}
        self._articles: dict[int, Article] = {}

    def clear(self) -> None:
        self._courses.clear()
        self._lessons.clear()
        self._remedies.clear()
        self._videos.clear()
        self._articles.clear()

    async def list_courses(self) -> list[Course]:
        return [c for c in self._courses.values() if c.status == "active"]

    async def get_course(self, course_id: int) -> Course | None:
        return self._courses.get(course_id)

    async def list_lessons(self, course_id: int) -> list[Lesson]:
        lessons = [
            lesson
            for lesson in self._lessons.values()
            if lesson.course_id == course_id and lesson.status == "active"
        ]
        return sorted(lessons, key=_lesson_sort_key)

    async def list_remedies(self) -> list[Remedy]:
        return [r for r in self._remedies.values() if r.status == "active"]

    async def get_remedy(self, remedy_id: int) -> Remedy | None:
        return self._remedies.get(remedy_id)

    async def list_videos(self) -> list[Video]:
        return [v for v in self._videos.values() if v.status == "active"]

    async def get_video(self, video_id: int) -> Video | None:
        return self._videos.get(video_id)

    async def get_article(self, article_id: int) -> Article | None:
        return self._articles.get(article_id)

    async def add_course(self, course: Course) -> None:
        if course.id in self._courses:
            raise ValueError("course id already exists")
        self._courses[course.id] = course

    async def add_lesson(self, lesson: Lesson) -> None:
        if lesson.course_id not in self._courses:
            raise ValueError("lesson references unknown course")
        if lesson.id in self._lessons:
            raise ValueError("lesson id already exists")
        self._lessons[lesson.id] = lesson

    async def add_remedy(self, remedy: Remedy) -> None:
        if remedy.id in self._remedies:
            raise ValueError("remedy id already exists")
        self._remedies[remedy.id] = remedy

    async def add_video(self, video: Video) -> None:
        if video.id in self._videos:
            raise ValueError("video id already exists")
        self._videos[video.id] = video

    async def add_article(self, article: Article) -> None:
        if article.id in self._articles:
            raise ValueError("article id already exists")
        self._articles[article.id] = article
