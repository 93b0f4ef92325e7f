from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

# Before any wellness import: SETTINGS is read once at import time.
os.environ.setdefault("APP_ENV", "test")

# Ensure repo root is on sys.path so `import wellness` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from wellness.main import app  # noqa: E402
from wellness.models.content import Article, Remedy, Video  # noqa: E402
from wellness.models.course import Course, Lesson, LessonProgress  # noqa: E402
from wellness.models.review import Reaction, Review  # noqa: E402
from wellness.repos.bundle import (  # noqa: E402
    catalog_repo,
    favorite_repo,
    progress_repo,
    reaction_repo,
    review_repo,
)
from wellness.services import token_service  # noqa: E402


@pytest.fixture(autouse=True)
def reset_repos() -> None:
    """Clear every in-memory repository between tests."""
    catalog_repo.clear()
    review_repo.clear()
    reaction_repo.clear_all()
    favorite_repo.clear()
    progress_repo.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def mint_token(user_id: int = 7, roles: list[str] | None = None) -> str:
    """Create a valid ES256 JWT for testing."""
    return token_service.create_access_token(sub=str(user_id), roles=roles)


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def token() -> str:
    """Token for user 7 with the default role (user)."""
    return mint_token()


@pytest.fixture
def admin_token() -> str:
    return mint_token(user_id=1, roles=["admin"])


# ---------------------------------------------------------------------------
# Seed helpers
# ---------------------------------------------------------------------------


def seed_course(course_id: int = 1, lesson_ids: tuple[int, ...] = (1, 2, 3), **kw) -> Course:
    """Persist a course and its lessons (lesson order follows *lesson_ids*)."""
    course = Course(id=course_id, title=kw.pop("title", f"Course {course_id}"), **kw)
    asyncio.run(catalog_repo.add_course(course))
    for order, lesson_id in enumerate(lesson_ids, start=1):
        asyncio.run(
            catalog_repo.add_lesson(
                Lesson(
                    id=lesson_id,
                    course_id=course_id,
                    order=order,
                    title=f"Lesson {lesson_id}",
                )
            )
        )
    return course


def seed_remedy(remedy_id: int = 1, **kw) -> Remedy:
    remedy = Remedy(id=remedy_id, title=kw.pop("title", f"Remedy {remedy_id}"), **kw)
    asyncio.run(catalog_repo.add_remedy(remedy))
    return remedy


def seed_video(video_id: int = 1, **kw) -> Video:
    video = Video(id=video_id, title=kw.pop("title", f"Video {video_id}"), **kw)
    asyncio.run(catalog_repo.add_video(video))
    return video


def seed_article(article_id: int = 1, **kw) -> Article:
    article = Article(id=article_id, title=kw.pop("title", f"Article {article_id}"), **kw)
    asyncio.run(catalog_repo.add_article(article))
    return article


def seed_review(
    review_id: int,
    subject_type: str,
    subject_id: int,
    rating: int,
    *,
    author_id: int = 100,
    status: str = "accepted",
    created_at: int | None = None,
) -> Review:
    review = Review(
        id=review_id,
        author_id=author_id,
        subject_type=subject_type,
        subject_id=subject_id,
        rating=rating,
        message=f"review {review_id}",
        status=status,
        created_at=created_at if created_at is not None else review_id,
    )
    review_repo.put(review)
    return review


def seed_reaction(review_id: int, user_id: int, kind: str) -> Reaction:
    return asyncio.run(reaction_repo.set(review_id, user_id, kind))


def seed_progress(
    user_id: int, course_id: int, lesson_id: int, status: str
) -> LessonProgress:
    record = LessonProgress(
        user_id=user_id, course_id=course_id, lesson_id=lesson_id, status=status
    )
    progress_repo.put(record)
    return record
