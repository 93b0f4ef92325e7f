"""One object carrying every repository a request needs.

Without DATABASE_URL the process-wide in-memory repositories are shared
by all requests.  With it, each request gets Pg repositories bound to its
own session, committed when the handler returns normally and rolled
back when it raises.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from wellness.db.engine import async_session_factory
from wellness.repos.catalog_repo import CatalogRepo, InMemoryCatalogRepo
from wellness.repos.favorite_repo import FavoriteRepo, InMemoryFavoriteRepo
from wellness.repos.pg_catalog_repo import PgCatalogRepo
from wellness.repos.pg_favorite_repo import PgFavoriteRepo
from wellness.repos.pg_progress_repo import PgProgressRepo
from wellness.repos.pg_review_repo import PgReactionRepo, PgReviewRepo
from wellness.repos.progress_repo import InMemoryProgressRepo, ProgressRepo
from wellness.repos.reaction_repo import InMemoryReactionRepo, ReactionRepo
from wellness.repos.review_repo import InMemoryReviewRepo, ReviewRepo

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RepoBundle:
    catalog: CatalogRepo
    reviews: ReviewRepo
    reactions: ReactionRepo
    favorites: FavoriteRepo
    progress: ProgressRepo


def pg_bundle(session: AsyncSession) -> RepoBundle:
    return RepoBundle(
        catalog=PgCatalogRepo(session),
        reviews=PgReviewRepo(session),
        reactions=PgReactionRepo(session),
        favorites=PgFavoriteRepo(session),
        progress=PgProgressRepo(session),
    )


# --- Module-level in-memory singletons ---
catalog_repo = InMemoryCatalogRepo()
review_repo = InMemoryReviewRepo()
reaction_repo = InMemoryReactionRepo()
favorite_repo = InMemoryFavoriteRepo()
progress_repo = InMemoryProgressRepo()

IN_MEMORY = RepoBundle(
    catalog=catalog_repo,
    reviews=review_repo,
    reactions=reaction_repo,
    favorites=favorite_repo,
    progress=progress_repo,
)


async def get_repos() -> AsyncGenerator[RepoBundle, None]:
    """FastAPI dependency yielding the repositories for this request."""
    if async_session_factory is None:
        yield IN_MEMORY
        return

    async with async_session_factory() as session:
        try:
            yield pg_bundle(session)
            await session.commit()
        except Exception:
            logger.debug("Rolling back request session")
            await session.rollback()
            raise
