"""Bearer token handling: bad or missing tokens downgrade to a guest on
public endpoints and are rejected (401) on authenticated ones."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
from fastapi.testclient import TestClient

from tests.conftest import auth, seed_course, seed_progress, seed_remedy, seed_review
from wellness.services import token_service


def test_expired_token_is_guest_on_public_endpoint(client: TestClient) -> None:
    seed_course(1, lesson_ids=(1, 2))
    seed_progress(7, 1, 1, "completed")
    token = token_service.create_access_token(sub="7", ttl=timedelta(seconds=-1))

    data = client.get("/v1/courses/1", headers=auth(token)).json()
    assert data["coming_lesson_id"] == 1
    assert "progress" not in data


def test_expired_token_is_401_on_authenticated_endpoint(client: TestClient) -> None:
    token = token_service.create_access_token(sub="7", ttl=timedelta(seconds=-1))
    assert client.get("/v1/me/courses", headers=auth(token)).status_code == 401


def test_non_numeric_subject_is_guest(client: TestClient) -> None:
    seed_course(1)
    token = token_service.create_access_token(sub="alice")
    assert client.get("/v1/courses/1", headers=auth(token)).status_code == 200
    assert client.get("/v1/me/courses", headers=auth(token)).status_code == 401


def test_valid_token_is_identity(client: TestClient, token: str) -> None:
    seed_course(1, lesson_ids=(1, 2))
    seed_progress(7, 1, 1, "completed")
    data = client.get("/v1/courses/1", headers=auth(token)).json()
    assert data["coming_lesson_id"] == 2


def _token_with_roles(roles: object) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": "7",
        "iss": token_service.ISSUER,
        "aud": token_service.AUDIENCE,
        "exp": now + timedelta(minutes=5),
        "iat": now,
        "roles": roles,
    }
    return jwt.encode(payload, token_service._private_key, algorithm=token_service.ALGORITHM)


def test_malformed_roles_claim_means_no_roles(client: TestClient) -> None:
    seed_course(1, lesson_ids=(1, 2))
    seed_progress(7, 1, 1, "completed")

    for roles in (5, "admin", {"admin": True}):
        token = _token_with_roles(roles)
        resp = client.get("/v1/courses/1", headers=auth(token))
        assert resp.status_code == 200
        assert resp.json()["coming_lesson_id"] == 2
        resp = client.patch(
            "/v1/reviews/1/status", json={"status": "accepted"}, headers=auth(token)
        )
        assert resp.status_code == 403


def test_non_string_roles_are_dropped(client: TestClient) -> None:
    seed_remedy(1)
    seed_review(1, "remedy", 1, 4, status="pending")
    token = _token_with_roles(["admin", 3, None])
    resp = client.patch(
        "/v1/reviews/1/status", json={"status": "accepted"}, headers=auth(token)
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "accepted"
