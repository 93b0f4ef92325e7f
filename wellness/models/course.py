from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

LessonStatus = Literal["not_started", "in_progress", "completed"]

LESSON_STATUSES: tuple[str, ...] = ("not_started", "in_progress", "completed")


@dataclass(frozen=True, slots=True)
class Course:
    id: int
    title: str
    description: str = ""
    image: str | None = None
    duration: str | None = None
    price: float = 0.0
    overview: str | None = None
    status: str = "active"  # active|inactive


@dataclass(frozen=True, slots=True)
class Lesson:
    id: int
    course_id: int
    order: int
    title: str
    description: str = ""
    image: str | None = None
    status: str = "active"  # active|inactive


@dataclass(frozen=True, slots=True)
class LessonProgress:
    """One record per (user, lesson)."""

    user_id: int
    course_id: int
    lesson_id: int
    status: str = "not_started"  # not_started|in_progress|completed
    started_at: int | None = None
    completed_at: int | None = None
