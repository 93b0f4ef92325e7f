"""Compose response payloads from entities plus derived projections.

Related data comes in as a Relation (see wellness.models.relation):

  Loaded(value) - the caller fetched it; empty collections yield zero /
                  empty-list fields.
  OMITTED       - the caller did not fetch it; derived fields are left
                  out, except the few the mobile client relies on always
                  seeing (reviews, average_rating, review_count, course
                  is_fav), which fall back to their zero value.

Nothing here touches a repository.  Field names are the mobile API's
wire names and must not change.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from typing import Any

from wellness.models.content import Article, Remedy, Video
from wellness.models.course import Course, Lesson, LessonProgress
from wellness.models.favorite import Favorite
from wellness.models.identity import Identity
from wellness.models.relation import (
    OMITTED,
    Loaded,
    Relation,
    map_loaded,
    value_or,
)
from wellness.models.review import Reaction, Review
from wellness.services.favorite_service import is_favorite
from wellness.services.progress_service import CourseProgressView, project_progress
from wellness.services.rating_service import aggregate_ratings
from wellness.services.reaction_service import count_reactions, resolve_reaction

DEFAULT_PREVIEW_LIMIT = 2

ReactionsByReview = Mapping[int, Sequence[Reaction]]


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------


def review_view(
    review: Review,
    identity: Identity | None,
    reactions: Relation[Sequence[Reaction]] = OMITTED,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": review.id,
        "user_id": review.author_id,
        "type": review.subject_type,
        "element_id": review.subject_id,
        "rate": review.rating,
        "message": review.message,
        "status": review.status,
    }

    if isinstance(reactions, Loaded):
        likes, dislikes = count_reactions(reactions.value)
        data["likes_count"] = likes
        data["dislikes_count"] = dislikes
        data["isLiked"] = resolve_reaction(identity, reactions.value).is_liked

    data["created_at"] = review.created_at
    data["updated_at"] = review.updated_at
    return data


def reviews_view(
    reviews: Sequence[Review],
    identity: Identity | None,
    reactions: Relation[ReactionsByReview] = OMITTED,
) -> list[dict[str, Any]]:
    return [
        review_view(review, identity, _reactions_for(review.id, reactions))
        for review in reviews
    ]


def _reactions_for(
    review_id: int, reactions: Relation[ReactionsByReview]
) -> Relation[Sequence[Reaction]]:
    return map_loaded(reactions, lambda by_review: by_review.get(review_id, ()))


def _add_review_block(
    data: dict[str, Any],
    identity: Identity | None,
    reviews: Relation[Sequence[Review]],
    reactions: Relation[ReactionsByReview],
    preview_limit: int,
) -> None:
    if isinstance(reviews, Loaded):
        summary = aggregate_ratings(reviews.value)
        preview = reviews.value[:preview_limit]
        data["reviews"] = reviews_view(preview, identity, reactions)
        data["average_rating"] = summary.average_rating
        data["review_count"] = summary.review_count
    else:
        data["reviews"] = []
        data["average_rating"] = 0.0
        data["review_count"] = 0


def _add_favorite_flag(
    data: dict[str, Any],
    identity: Identity | None,
    entity_type: str,
    entity_id: int,
    favorites: Relation[Collection[Favorite]],
    *,
    always: bool = False,
) -> None:
    if isinstance(favorites, Loaded):
        data["is_fav"] = is_favorite(identity, entity_type, entity_id, favorites.value)
    elif always:
        data["is_fav"] = False


# ---------------------------------------------------------------------------
# Remedies, videos, articles
# ---------------------------------------------------------------------------


def remedy_view(
    remedy: Remedy,
    identity: Identity | None,
    *,
    reviews: Relation[Sequence[Review]] = OMITTED,
    reactions: Relation[ReactionsByReview] = OMITTED,
    favorites: Relation[Collection[Favorite]] = OMITTED,
    preview_limit: int = DEFAULT_PREVIEW_LIMIT,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": remedy.id,
        "title": remedy.title,
        "main_image_url": remedy.main_image_url,
        "description": remedy.description,
        "status": remedy.status,
        "ingredients": remedy.ingredients,
        "instructions": remedy.instructions,
        "benefits": remedy.benefits,
        "precautions": remedy.precautions,
        "product_link": remedy.product_link,
    }
    _add_review_block(data, identity, reviews, reactions, preview_limit)
    _add_favorite_flag(data, identity, "remedy", remedy.id, favorites)
    return data


def video_view(
    video: Video,
    identity: Identity | None,
    *,
    reviews: Relation[Sequence[Review]] = OMITTED,
    reactions: Relation[ReactionsByReview] = OMITTED,
    favorites: Relation[Collection[Favorite]] = OMITTED,
    preview_limit: int = DEFAULT_PREVIEW_LIMIT,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": video.id,
        "image": video.image,
        "videoLink": video.video_link,
        "title": video.title,
        "description": video.description,
        "status": video.status,
        "ingredients": video.ingredients,
        "instructions": video.instructions,
        "benefits": video.benefits,
    }
    _add_review_block(data, identity, reviews, reactions, preview_limit)
    _add_favorite_flag(data, identity, "video", video.id, favorites)
    return data


def article_view(
    article: Article,
    identity: Identity | None,
    *,
    favorites: Relation[Collection[Favorite]] = OMITTED,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": article.id,
        "title": article.title,
        "description": article.description,
        "image": article.image,
        "content": article.content,
        "status": article.status,
    }
    _add_favorite_flag(data, identity, "article", article.id, favorites)
    return data


# ---------------------------------------------------------------------------
# Courses
# ---------------------------------------------------------------------------


def _course_fields(course: Course) -> dict[str, Any]:
    return {
        "id": course.id,
        "image": course.image,
        "title": course.title,
        "description": course.description,
        "duration": course.duration,
        "price": course.price,
        "overview": course.overview,
        "status": course.status,
    }


def lesson_view(lesson: Lesson) -> dict[str, Any]:
    return {
        "id": lesson.id,
        "title": lesson.title,
        "description": lesson.description,
        "image": lesson.image,
        "status": lesson.status,
    }


def progress_block(view: CourseProgressView) -> dict[str, Any]:
    return {
        "percentage": view.percentage,
        "total_lessons": view.total_lessons,
        "completed_lessons": view.completed_lessons,
        "remaining_lessons": view.remaining_lessons,
        "is_started": view.is_started,
    }


def course_index_view(
    course: Course,
    identity: Identity | None,
    *,
    reviews: Relation[Sequence[Review]] = OMITTED,
    favorites: Relation[Collection[Favorite]] = OMITTED,
) -> dict[str, Any]:
    data = _course_fields(course)
    if isinstance(reviews, Loaded):
        summary = aggregate_ratings(reviews.value)
        data["average_rating"] = summary.average_rating
        data["review_count"] = summary.review_count
    else:
        data["average_rating"] = 0.0
        data["review_count"] = 0
    _add_favorite_flag(data, identity, "course", course.id, favorites, always=True)
    return data


def course_detail_view(
    course: Course,
    identity: Identity | None,
    *,
    lessons: Relation[Sequence[Lesson]] = OMITTED,
    progress: Relation[Mapping[int, LessonProgress]] = OMITTED,
    reviews: Relation[Sequence[Review]] = OMITTED,
    reactions: Relation[ReactionsByReview] = OMITTED,
    favorites: Relation[Collection[Favorite]] = OMITTED,
    preview_limit: int = DEFAULT_PREVIEW_LIMIT,
) -> dict[str, Any]:
    data = _course_fields(course)
    _add_review_block(data, identity, reviews, reactions, preview_limit)

    lesson_list: Sequence[Lesson] = ()
    if isinstance(lessons, Loaded):
        lesson_list = lessons.value
        data["lessons"] = [lesson_view(lesson) for lesson in lesson_list]
    data["lessons_count"] = len(lesson_list)

    _add_favorite_flag(data, identity, "course", course.id, favorites, always=True)

    view = project_progress(lesson_list, value_or(progress, {}), identity)

    data["is_started"] = view.is_started
    data["coming_lesson_id"] = view.next_lesson_id
    if identity is not None and isinstance(progress, Loaded):
        data["progress"] = progress_block(view)
    return data


def my_course_view(
    course: Course,
    lessons: Sequence[Lesson],
    view: CourseProgressView,
) -> dict[str, Any]:
    course_data = _course_fields(course)
    course_data["lessons"] = [lesson_view(lesson) for lesson in lessons]
    return {
        "course": course_data,
        "progress": progress_block(view),
    }


def progress_summary_view(course_id: int, view: CourseProgressView) -> dict[str, Any]:
    return {
        "course_id": course_id,
        "total_lessons": view.total_lessons,
        "completed_lessons": view.completed_lessons,
        "remaining_lessons": view.remaining_lessons,
        "progress_percentage": view.percentage,
        "is_started": view.is_started,
        "is_completed": view.is_completed,
        "coming_lesson_id": view.next_lesson_id,
    }
