"""SQL implementation of FavoriteRepo."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from wellness.db.tables import FavoriteRow
from wellness.models.favorite import Favorite


class PgFavoriteRepo:
    """Satisfies the FavoriteRepo Protocol using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_for_user(
        self, user_id: int, entity_type: str | None = None
    ) -> list[Favorite]:
        stmt = select(FavoriteRow).where(FavoriteRow.user_id == user_id)
        if entity_type is not None:
            stmt = stmt.where(FavoriteRow.favoritable_type == entity_type)
        stmt = stmt.order_by(FavoriteRow.id)
        rows = (await self._session.execute(stmt)).scalars().all()
        return [
            Favorite(
                user_id=r.user_id,
                entity_type=r.favoritable_type,
                entity_id=r.favoritable_id,
            )
            for r in rows
        ]

    async def add(self, favorite: Favorite) -> bool:
        if await self._find(favorite) is not None:
            return False
        self._session.add(
            FavoriteRow(
                user_id=favorite.user_id,
                favoritable_type=favorite.entity_type,
                favoritable_id=favorite.entity_id,
            )
        )
        await self._session.flush()
        return True

    async def remove(self, favorite: Favorite) -> bool:
        stmt = delete(FavoriteRow).where(
            FavoriteRow.user_id == favorite.user_id,
            FavoriteRow.favoritable_type == favorite.entity_type,
            FavoriteRow.favoritable_id == favorite.entity_id,
        )
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def _find(self, favorite: Favorite) -> FavoriteRow | None:
        stmt = select(FavoriteRow).where(
            FavoriteRow.user_id == favorite.user_id,
            FavoriteRow.favoritable_type == favorite.entity_type,
            FavoriteRow.favoritable_id == favorite.entity_id,
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()
