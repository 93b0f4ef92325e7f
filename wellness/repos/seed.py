"""Sample content for local development (in-memory repositories only)."""

from __future__ import annotations

import logging

from wellness.models.content import Article, Remedy, Video
from wellness.models.course import Course, Lesson
from wellness.repos.bundle import RepoBundle

logger = logging.getLogger(__name__)


async def seed_sample_content(repos: RepoBundle) -> None:
    if await repos.catalog.get_course(1) is not None:
        return

    await repos.catalog.add_course(
        Course(
            id=1,
            title="Foundations of Herbal Wellness",
            description="A gentle introduction to everyday herbal remedies.",
            duration="2h 30m",
            price=19.99,
        )
    )
    for order, title in enumerate(
        ["Welcome", "Your Home Apothecary", "Teas and Infusions", "Safety First"],
        start=1,
    ):
        await repos.catalog.add_lesson(
            Lesson(id=order, course_id=1, order=order, title=title)
        )

    await repos.catalog.add_remedy(
        Remedy(
            id=1,
            title="Ginger and Honey Tea",
            description="Warming tea for sore throats.",
            ingredients="Fresh ginger, honey, lemon",
            instructions="Steep sliced ginger for 10 minutes, add honey and lemon.",
        )
    )
    await repos.catalog.add_video(
        Video(id=1, title="Making a Chamomile Infusion", video_link="https://example.com/v/1")
    )
    await repos.catalog.add_article(
        Article(id=1, title="Sleep Hygiene Basics", content="Keep a regular schedule.")
    )
    logger.info("Seeded sample content: 1 course, 4 lessons, 1 remedy, 1 video, 1 article")
