from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from wellness.models.course import LessonProgress


class ProgressRepo(Protocol):
    async def list_for_course(
        self, user_id: int, course_id: int
    ) -> list[LessonProgress]: ...
    async def list_course_ids(self, user_id: int) -> list[int]: ...
    async def start_lesson(
        self, user_id: int, course_id: int, lesson_id: int, at: int
    ) -> LessonProgress: ...
    async def complete_lesson(
        self, user_id: int, course_id: int, lesson_id: int, at: int
    ) -> LessonProgress: ...


class InMemoryProgressRepo:
    """One record per (user_id, lesson_id)."""

    def __init__(self) -> None:
        self._store: dict[tuple[int, int], LessonProgress] = {}

    def clear(self) -> None:
        self._store.clear()

    def put(self, record: LessonProgress) -> None:
        self._store[(record.user_id, record.lesson_id)] = record

    async def list_for_course(
        self, user_id: int, course_id: int
    ) -> list[LessonProgress]:
        return [
            p
            for p in self._store.values()
            if p.user_id == user_id and p.course_id == course_id
        ]

    async def list_course_ids(self, user_id: int) -> list[int]:
        return sorted({p.course_id for p in self._store.values() if p.user_id == user_id})

    async def start_lesson(
        self, user_id: int, course_id: int, lesson_id: int, at: int
    ) -> LessonProgress:
        existing = self._store.get((user_id, lesson_id))
        if existing is None:
            record = LessonProgress(
                user_id=user_id,
                course_id=course_id,
                lesson_id=lesson_id,
                status="in_progress",
                started_at=at,
            )
        elif existing.status == "completed":
            # Re-opening a finished lesson must not undo its completion.
            return existing
        else:
            record = replace(
                existing,
                status="in_progress",
                started_at=existing.started_at or at,
            )
        self._store[(user_id, lesson_id)] = record
        return record

    async def complete_lesson(
        self, user_id: int, course_id: int, lesson_id: int, at: int
    ) -> LessonProgress:
        existing = self._store.get((user_id, lesson_id))
        if existing is not None and existing.status == "completed":
            return existing
        record = LessonProgress(
            user_id=user_id,
            course_id=course_id,
            lesson_id=lesson_id,
            status="completed",
            started_at=(existing.started_at if existing else None) or at,
            completed_at=at,
        )
        self._store[(user_id, lesson_id)] = record
        return record
