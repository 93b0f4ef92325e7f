"""Course progress and the "coming lesson" to resume.

Derived on every read from the user's LessonProgress records - there is
no stored percentage to drift out of sync with the lesson list.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal

from wellness.core.metrics import PROJECTION_SKIPPED_RECORDS
from wellness.models.course import LESSON_STATUSES, Lesson, LessonProgress
from wellness.models.identity import Identity
from wellness.services.rating_service import round_half_up

logger = logging.getLogger(__name__)

_STARTED_STATUSES = frozenset({"in_progress", "completed"})


@dataclass(frozen=True, slots=True)
class CourseProgressView:
    percentage: float
    total_lessons: int
    completed_lessons: int
    next_lesson_id: int | None
    is_started: bool

    @property
    def remaining_lessons(self) -> int:
        return self.total_lessons - self.completed_lessons

    @property
    def is_completed(self) -> bool:
        return self.total_lessons > 0 and self.completed_lessons == self.total_lessons


def index_progress(records: Iterable[LessonProgress]) -> dict[int, LessonProgress]:
    """Key one user's progress records by lesson id (last record wins)."""
    return {record.lesson_id: record for record in records}


def completion_percentage(completed: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round_half_up(Decimal(completed) * 100 / Decimal(total))


def project_progress(
    lessons: Sequence[Lesson],
    progress_by_lesson: Mapping[int, LessonProgress],
    identity: Identity | None,
) -> CourseProgressView:
    """Project completion and the next lesson for one user and course.

    *lessons* must already be in course order.  Progress entries for
    lessons not in *lessons* are ignored.
    """
    total = len(lessons)

    if identity is None:
        return CourseProgressView(
            percentage=0.0,
            total_lessons=total,
            completed_lessons=0,
            next_lesson_id=lessons[0].id if lessons else None,
            is_started=False,
        )

    completed = 0
    started = False
    next_lesson_id: int | None = None

    for lesson in lessons:
        status = _status_of(progress_by_lesson.get(lesson.id))
        if status == "completed":
            completed += 1
        elif next_lesson_id is None:
            next_lesson_id = lesson.id
        if status in _STARTED_STATUSES:
            started = True

    return CourseProgressView(
        percentage=completion_percentage(completed, total),
        total_lessons=total,
        completed_lessons=completed,
        next_lesson_id=next_lesson_id,
        is_started=started,
    )


def _status_of(record: LessonProgress | None) -> str | None:
    if record is None:
        return None
    if record.status not in LESSON_STATUSES:
        logger.warning(
            "Ignoring progress user=%s lesson=%s with unknown status=%r",
            record.user_id,
            record.lesson_id,
            record.status,
        )
        PROJECTION_SKIPPED_RECORDS.labels(record="progress").inc()
        return None
    return record.status
