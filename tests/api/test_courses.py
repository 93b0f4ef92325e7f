from __future__ import annotations

import asyncio

from fastapi.testclient import TestClient

from tests.conftest import (
    auth,
    mint_token,
    seed_course,
    seed_progress,
    seed_review,
)
from wellness.models.course import Course
from wellness.models.favorite import Favorite
from wellness.repos.bundle import catalog_repo, favorite_repo


def test_list_courses_guest(client: TestClient) -> None:
    seed_course(1)
    seed_review(1, "course", 1, 5)
    seed_review(2, "course", 1, 4)
    seed_review(3, "course", 1, 1, status="pending")

    resp = client.get("/v1/courses")
    assert resp.status_code == 200
    [course] = resp.json()
    assert course["id"] == 1
    assert course["average_rating"] == 4.5
    assert course["review_count"] == 2
    assert course["is_fav"] is False


def test_list_courses_hides_inactive(client: TestClient) -> None:
    seed_course(1)
    asyncio.run(catalog_repo.add_course(Course(id=2, title="Old", status="inactive")))
    resp = client.get("/v1/courses")
    assert [c["id"] for c in resp.json()] == [1]


def test_list_courses_marks_favorites(client: TestClient, token: str) -> None:
    seed_course(1)
    seed_course(2, lesson_ids=(4,))
    asyncio.run(favorite_repo.add(Favorite(7, "course", 2)))

    resp = client.get("/v1/courses", headers=auth(token))
    flags = {c["id"]: c["is_fav"] for c in resp.json()}
    assert flags == {1: False, 2: True}


def test_course_detail_guest(client: TestClient) -> None:
    seed_course(1, lesson_ids=(1, 2, 3))
    seed_review(1, "course", 1, 5)
    seed_review(2, "course", 1, 4)
    seed_review(3, "course", 1, 3)

    resp = client.get("/v1/courses/1")
    assert resp.status_code == 200
    data = resp.json()
    assert data["is_fav"] is False
    assert data["is_started"] is False
    assert data["coming_lesson_id"] == 1
    assert data["lessons_count"] == 3
    assert data["average_rating"] == 4.0
    assert data["review_count"] == 3
    # Preview limited to the two newest reviews
    assert [r["id"] for r in data["reviews"]] == [3, 2]
    assert data["reviews"][0]["isLiked"] is None
    assert "progress" not in data


def test_course_detail_with_progress(client: TestClient, token: str) -> None:
    seed_course(1, lesson_ids=(1, 2, 3))
    seed_progress(7, 1, 1, "completed")

    data = client.get("/v1/courses/1", headers=auth(token)).json()
    assert data["is_started"] is True
    assert data["coming_lesson_id"] == 2
    assert data["progress"]["percentage"] == 33.3
    assert data["progress"]["remaining_lessons"] == 2


def test_course_detail_invalid_token_is_guest(client: TestClient) -> None:
    seed_course(1)
    resp = client.get("/v1/courses/1", headers=auth("not-a-jwt"))
    assert resp.status_code == 200
    assert resp.json()["coming_lesson_id"] == 1


def test_course_detail_not_found(client: TestClient) -> None:
    resp = client.get("/v1/courses/999")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "course not found"


def test_course_detail_rejects_non_integer_id(client: TestClient) -> None:
    assert client.get("/v1/courses/abc").status_code == 422


# ---- progress ----


def test_progress_requires_auth(client: TestClient) -> None:
    seed_course(1)
    resp = client.get("/v1/courses/1/progress")
    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


def test_start_and_complete_lessons(client: TestClient, token: str) -> None:
    seed_course(1, lesson_ids=(1, 2, 3))
    headers = auth(token)

    resp = client.post("/v1/courses/1/lessons/1/start", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["status"] == "in_progress"

    resp = client.post("/v1/courses/1/lessons/1/complete", headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "completed"
    assert data["course_progress"] == 33.3
    assert data["completed_lessons"] == 1
    assert data["total_lessons"] == 3
    assert data["coming_lesson_id"] == 2

    summary = client.get("/v1/courses/1/progress", headers=headers).json()
    assert summary == {
        "course_id": 1,
        "total_lessons": 3,
        "completed_lessons": 1,
        "remaining_lessons": 2,
        "progress_percentage": 33.3,
        "is_started": True,
        "is_completed": False,
        "coming_lesson_id": 2,
    }


def test_completing_last_lesson_finishes_course(client: TestClient, token: str) -> None:
    seed_course(1, lesson_ids=(1, 2))
    headers = auth(token)
    client.post("/v1/courses/1/lessons/1/complete", headers=headers)
    data = client.post("/v1/courses/1/lessons/2/complete", headers=headers).json()
    assert data["course_progress"] == 100.0
    assert data["coming_lesson_id"] is None

    summary = client.get("/v1/courses/1/progress", headers=headers).json()
    assert summary["is_completed"] is True


def test_lesson_from_another_course_is_404(client: TestClient, token: str) -> None:
    seed_course(1, lesson_ids=(1, 2))
    seed_course(2, lesson_ids=(3,))
    resp = client.post("/v1/courses/1/lessons/3/start", headers=auth(token))
    assert resp.status_code == 404


def test_my_courses_lists_started_courses(client: TestClient) -> None:
    seed_course(1, lesson_ids=(1, 2))
    seed_course(2, lesson_ids=(3, 4))
    seed_progress(5, 2, 3, "completed")

    resp = client.get("/v1/me/courses", headers=auth(mint_token(user_id=5)))
    assert resp.status_code == 200
    [entry] = resp.json()
    assert entry["course"]["id"] == 2
    assert [lesson["id"] for lesson in entry["course"]["lessons"]] == [3, 4]
    assert entry["progress"]["percentage"] == 50.0


def test_my_courses_empty_for_new_user(client: TestClient, token: str) -> None:
    seed_course(1)
    assert client.get("/v1/me/courses", headers=auth(token)).json() == []
