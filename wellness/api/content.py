"""Remedy, video and article endpoints (public, guest allowed)."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from wellness.api.dependencies import CurrentIdentity, Repos
from wellness.api.loaders import load_favorites, load_reviews
from wellness.core.config import SETTINGS
from wellness.models.relation import Loaded
from wellness.services.view_assembler import article_view, remedy_view, video_view

router = APIRouter(prefix="/v1", tags=["content"])


# ---- remedies ----


@router.get("/remedies")
async def list_remedies(identity: CurrentIdentity, repos: Repos) -> list[dict[str, Any]]:
    remedies = await repos.catalog.list_remedies()
    reviews = await repos.reviews.list_for_subjects("remedy", [r.id for r in remedies])
    favorites = await load_favorites(repos, identity, "remedy")
    # Listing rows show the rating summary only, no embedded reviews.
    return [
        remedy_view(
            remedy,
            identity,
            reviews=Loaded(reviews.get(remedy.id, [])),
            favorites=favorites,
            preview_limit=0,
        )
        for remedy in remedies
    ]


@router.get("/remedies/{remedy_id}")
async def get_remedy(
    remedy_id: int, identity: CurrentIdentity, repos: Repos
) -> dict[str, Any]:
    remedy = await repos.catalog.get_remedy(remedy_id)
    if remedy is None or remedy.status != "active":
        raise HTTPException(status_code=404, detail="remedy not found")

    reviews, reactions = await load_reviews(
        repos, "remedy", remedy_id, SETTINGS.review_preview_limit
    )
    return remedy_view(
        remedy,
        identity,
        reviews=reviews,
        reactions=reactions,
        favorites=await load_favorites(repos, identity, "remedy"),
        preview_limit=SETTINGS.review_preview_limit,
    )


# ---- videos ----


@router.get("/videos")
async def list_videos(identity: CurrentIdentity, repos: Repos) -> list[dict[str, Any]]:
    videos = await repos.catalog.list_videos()
    reviews = await repos.reviews.list_for_subjects("video", [v.id for v in videos])
    favorites = await load_favorites(repos, identity, "video")
    return [
        video_view(
            video,
            identity,
            reviews=Loaded(reviews.get(video.id, [])),
            favorites=favorites,
            preview_limit=0,
        )
        for video in videos
    ]


@router.get("/videos/{video_id}")
async def get_video(
    video_id: int, identity: CurrentIdentity, repos: Repos
) -> dict[str, Any]:
    video = await repos.catalog.get_video(video_id)
    if video is None or video.status != "active":
        raise HTTPException(status_code=404, detail="video not found")

    reviews, reactions = await load_reviews(
        repos, "video", video_id, SETTINGS.review_preview_limit
    )
    return video_view(
        video,
        identity,
        reviews=reviews,
        reactions=reactions,
        favorites=await load_favorites(repos, identity, "video"),
        preview_limit=SETTINGS.review_preview_limit,
    )


# ---- articles ----


@router.get("/articles/{article_id}")
async def get_article(
    article_id: int, identity: CurrentIdentity, repos: Repos
) -> dict[str, Any]:
    article = await repos.catalog.get_article(article_id)
    if article is None or article.status != "active":
        raise HTTPException(status_code=404, detail="article not found")
    return article_view(
        article,
        identity,
        favorites=await load_favorites(repos, identity, "article"),
    )
