"""Course catalog, course detail and lesson progress endpoints.

Course detail carries the requester-specific fields the mobile client
renders on the course screen: is_fav, is_started and coming_lesson_id
(the lesson the "Continue" button opens).  Guests get the same payload
with is_fav=false and coming_lesson_id pointing at the first lesson.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException

from wellness.api.dependencies import CurrentIdentity, Repos, require_identity
from wellness.api.loaders import load_favorites, load_reviews, now
from wellness.core.config import SETTINGS
from wellness.models.course import Course, Lesson, LessonProgress
from wellness.models.identity import Identity
from wellness.models.relation import OMITTED, Loaded, Relation
from wellness.repos.bundle import RepoBundle
from wellness.services.progress_service import index_progress, project_progress
from wellness.services.view_assembler import (
    course_detail_view,
    course_index_view,
    my_course_view,
    progress_summary_view,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1", tags=["courses"])


async def _get_course_or_404(repos: RepoBundle, course_id: int) -> Course:
    course = await repos.catalog.get_course(course_id)
    if course is None or course.status != "active":
        raise HTTPException(status_code=404, detail="course not found")
    return course


async def _get_lesson_or_404(
    repos: RepoBundle, course_id: int, lesson_id: int
) -> tuple[list[Lesson], Lesson]:
    lessons = await repos.catalog.list_lessons(course_id)
    for lesson in lessons:
        if lesson.id == lesson_id:
            return lessons, lesson
    raise HTTPException(status_code=404, detail="lesson not found in this course")


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@router.get("/courses")
async def list_courses(identity: CurrentIdentity, repos: Repos) -> list[dict[str, Any]]:
    courses = await repos.catalog.list_courses()
    reviews = await repos.reviews.list_for_subjects("course", [c.id for c in courses])
    favorites = await load_favorites(repos, identity, "course")
    return [
        course_index_view(
            course,
            identity,
            reviews=Loaded(reviews.get(course.id, [])),
            favorites=favorites,
        )
        for course in courses
    ]


@router.get("/courses/{course_id}")
async def get_course(
    course_id: int, identity: CurrentIdentity, repos: Repos
) -> dict[str, Any]:
    course = await _get_course_or_404(repos, course_id)
    lessons = await repos.catalog.list_lessons(course_id)
    reviews, reactions = await load_reviews(
        repos, "course", course_id, SETTINGS.review_preview_limit
    )

    progress: Relation[dict[int, LessonProgress]] = OMITTED
    if identity is not None:
        records = await repos.progress.list_for_course(identity.user_id, course_id)
        progress = Loaded(index_progress(records))

    return course_detail_view(
        course,
        identity,
        lessons=Loaded(lessons),
        progress=progress,
        reviews=reviews,
        reactions=reactions,
        favorites=await load_favorites(repos, identity, "course"),
        preview_limit=SETTINGS.review_preview_limit,
    )


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------


@router.get("/me/courses")
async def list_my_courses(
    identity: Annotated[Identity, Depends(require_identity)], repos: Repos
) -> list[dict[str, Any]]:
    """Courses the user has started, with their progress."""
    result = []
    for course_id in await repos.progress.list_course_ids(identity.user_id):
        course = await repos.catalog.get_course(course_id)
        if course is None or course.status != "active":
            continue
        lessons = await repos.catalog.list_lessons(course_id)
        records = await repos.progress.list_for_course(identity.user_id, course_id)
        view = project_progress(lessons, index_progress(records), identity)
        result.append(my_course_view(course, lessons, view))
    return result


@router.get("/courses/{course_id}/progress")
async def get_course_progress(
    course_id: int,
    identity: Annotated[Identity, Depends(require_identity)],
    repos: Repos,
) -> dict[str, Any]:
    await _get_course_or_404(repos, course_id)
    lessons = await repos.catalog.list_lessons(course_id)
    records = await repos.progress.list_for_course(identity.user_id, course_id)
    view = project_progress(lessons, index_progress(records), identity)
    return progress_summary_view(course_id, view)


@router.post("/courses/{course_id}/lessons/{lesson_id}/start")
async def start_lesson(
    course_id: int,
    lesson_id: int,
    identity: Annotated[Identity, Depends(require_identity)],
    repos: Repos,
) -> dict[str, Any]:
    await _get_course_or_404(repos, course_id)
    await _get_lesson_or_404(repos, course_id, lesson_id)

    record = await repos.progress.start_lesson(
        identity.user_id, course_id, lesson_id, now()
    )
    logger.info(
        "Lesson started user=%s course=%s lesson=%s",
        identity.user_id,
        course_id,
        lesson_id,
    )
    return {
        "lesson_id": record.lesson_id,
        "status": record.status,
        "started_at": record.started_at,
    }


@router.post("/courses/{course_id}/lessons/{lesson_id}/complete")
async def complete_lesson(
    course_id: int,
    lesson_id: int,
    identity: Annotated[Identity, Depends(require_identity)],
    repos: Repos,
) -> dict[str, Any]:
    await _get_course_or_404(repos, course_id)
    lessons, _lesson = await _get_lesson_or_404(repos, course_id, lesson_id)

    record = await repos.progress.complete_lesson(
        identity.user_id, course_id, lesson_id, now()
    )
    records = await repos.progress.list_for_course(identity.user_id, course_id)
    view = project_progress(lessons, index_progress(records), identity)

    logger.info(
        "Lesson completed user=%s course=%s lesson=%s progress=%.1f%%",
        identity.user_id,
        course_id,
        lesson_id,
        view.percentage,
    )
    return {
        "lesson_id": record.lesson_id,
        "status": record.status,
        "completed_at": record.completed_at,
        "course_progress": view.percentage,
        "completed_lessons": view.completed_lessons,
        "total_lessons": view.total_lessons,
        "coming_lesson_id": view.next_lesson_id,
    }
