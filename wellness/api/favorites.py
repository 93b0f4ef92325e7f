"""The requester's favorites across remedies, articles, courses and videos."""

from __future__ import annotations

import logging
from typing import Annotated, Any, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from wellness.api.dependencies import CurrentIdentity, Repos, require_identity
from wellness.models.favorite import Favorite, FavoriteType
from wellness.models.identity import Identity
from wellness.repos.bundle import RepoBundle
from wellness.services.favorite_service import is_favorite

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/favorites", tags=["favorites"])


class FavoriteIn(BaseModel):
    type: FavoriteType
    id: int


async def _title_of(repos: RepoBundle, entity_type: str, entity_id: int) -> str | None:
    """Title of a favorited entity, or None if it is gone or inactive."""
    if entity_type == "course":
        item: Any = await repos.catalog.get_course(entity_id)
    elif entity_type == "remedy":
        item = await repos.catalog.get_remedy(entity_id)
    elif entity_type == "video":
        item = await repos.catalog.get_video(entity_id)
    else:
        item = await repos.catalog.get_article(entity_id)
    if item is None or item.status != "active":
        return None
    return item.title


@router.get("")
async def list_favorites(
    identity: Annotated[Identity, Depends(require_identity)],
    repos: Repos,
    type: Annotated[Literal["all"] | FavoriteType, Query()] = "all",
) -> list[dict[str, Any]]:
    entity_type = None if type == "all" else type
    favorites = await repos.favorites.list_for_user(identity.user_id, entity_type)

    result = []
    for favorite in favorites:
        title = await _title_of(repos, favorite.entity_type, favorite.entity_id)
        if title is None:
            # Dangling favorite: the item was deleted or deactivated upstream.
            continue
        result.append(
            {"type": favorite.entity_type, "id": favorite.entity_id, "title": title}
        )
    return result


@router.get("/check")
async def check_favorite(
    identity: CurrentIdentity,
    repos: Repos,
    type: Annotated[FavoriteType, Query()],
    id: Annotated[int, Query()],
) -> dict[str, bool]:
    favorites: list[Favorite] = []
    if identity is not None:
        favorites = await repos.favorites.list_for_user(identity.user_id, type)
    return {"is_fav": is_favorite(identity, type, id, favorites)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_favorite(
    payload: FavoriteIn,
    identity: Annotated[Identity, Depends(require_identity)],
    repos: Repos,
) -> dict[str, Any]:
    if await _title_of(repos, payload.type, payload.id) is None:
        raise HTTPException(status_code=404, detail=f"{payload.type} not found")

    favorite = Favorite(identity.user_id, payload.type, payload.id)
    if not await repos.favorites.add(favorite):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="already in favorites"
        )
    logger.info(
        "Favorite added user=%s %s:%s", identity.user_id, payload.type, payload.id
    )
    return {"type": payload.type, "id": payload.id, "is_fav": True}


@router.delete("/{entity_type}/{entity_id}")
async def remove_favorite(
    entity_type: FavoriteType,
    entity_id: int,
    identity: Annotated[Identity, Depends(require_identity)],
    repos: Repos,
) -> dict[str, Any]:
    favorite = Favorite(identity.user_id, entity_type, entity_id)
    if not await repos.favorites.remove(favorite):
        raise HTTPException(status_code=404, detail="not in favorites")
    logger.info(
        "Favorite removed user=%s %s:%s", identity.user_id, entity_type, entity_id
    )
    return {"type": entity_type, "id": entity_id, "is_fav": False}
