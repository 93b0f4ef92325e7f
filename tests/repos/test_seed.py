from __future__ import annotations

import asyncio

from wellness.repos.bundle import IN_MEMORY
from wellness.repos.seed import seed_sample_content


def test_seed_sample_content_is_idempotent() -> None:
    asyncio.run(seed_sample_content(IN_MEMORY))
    asyncio.run(seed_sample_content(IN_MEMORY))

    lessons = asyncio.run(IN_MEMORY.catalog.list_lessons(1))
    assert [lesson.order for lesson in lessons] == [1, 2, 3, 4]
    assert asyncio.run(IN_MEMORY.catalog.get_remedy(1)) is not None
    assert asyncio.run(IN_MEMORY.catalog.get_video(1)) is not None
    assert asyncio.run(IN_MEMORY.catalog.get_article(1)) is not None
