from __future__ import annotations

import asyncio

from fastapi.testclient import TestClient

from tests.conftest import (
    auth,
    seed_article,
    seed_reaction,
    seed_remedy,
    seed_review,
    seed_video,
)
from wellness.models.favorite import Favorite
from wellness.repos.bundle import favorite_repo


def test_list_remedies_has_rating_summary_only(client: TestClient) -> None:
    seed_remedy(1)
    seed_remedy(2)
    seed_review(1, "remedy", 1, 5)
    seed_review(2, "remedy", 1, 2)

    resp = client.get("/v1/remedies")
    assert resp.status_code == 200
    by_id = {r["id"]: r for r in resp.json()}
    assert by_id[1]["average_rating"] == 3.5
    assert by_id[1]["review_count"] == 2
    assert by_id[1]["reviews"] == []
    assert by_id[2]["average_rating"] == 0.0
    assert by_id[2]["review_count"] == 0
    assert by_id[1]["is_fav"] is False


def test_remedy_detail_with_reactions(client: TestClient, token: str) -> None:
    seed_remedy(1, ingredients="ginger")
    seed_review(1, "remedy", 1, 4)
    seed_reaction(1, 7, "like")
    seed_reaction(1, 8, "like")
    seed_reaction(1, 9, "dislike")
    asyncio.run(favorite_repo.add(Favorite(7, "remedy", 1)))

    data = client.get("/v1/remedies/1", headers=auth(token)).json()
    assert data["ingredients"] == "ginger"
    assert data["is_fav"] is True
    [review] = data["reviews"]
    assert review["likes_count"] == 2
    assert review["dislikes_count"] == 1
    assert review["isLiked"] is True


def test_remedy_detail_guest_sees_counts_but_no_reaction(client: TestClient) -> None:
    seed_remedy(1)
    seed_review(1, "remedy", 1, 4)
    seed_reaction(1, 7, "dislike")

    [review] = client.get("/v1/remedies/1").json()["reviews"]
    assert review["dislikes_count"] == 1
    assert review["isLiked"] is None


def test_inactive_remedy_is_404(client: TestClient) -> None:
    seed_remedy(1, status="inactive")
    assert client.get("/v1/remedies/1").status_code == 404
    assert client.get("/v1/remedies").json() == []


def test_videos(client: TestClient) -> None:
    seed_video(1, video_link="https://example.com/v/1")
    seed_review(1, "video", 1, 5)

    [listed] = client.get("/v1/videos").json()
    assert listed["videoLink"] == "https://example.com/v/1"
    assert listed["average_rating"] == 5.0

    detail = client.get("/v1/videos/1").json()
    assert [r["id"] for r in detail["reviews"]] == [1]
    assert client.get("/v1/videos/2").status_code == 404


def test_article_detail(client: TestClient, token: str) -> None:
    seed_article(1, content="Sleep well.")
    guest = client.get("/v1/articles/1").json()
    assert guest["content"] == "Sleep well."
    assert guest["is_fav"] is False

    asyncio.run(favorite_repo.add(Favorite(7, "article", 1)))
    assert client.get("/v1/articles/1", headers=auth(token)).json()["is_fav"] is True
    assert client.get("/v1/articles/2").status_code == 404
