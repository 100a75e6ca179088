"""Profile service: default profiles, updates, the style quiz and tips."""

from __future__ import annotations

import pytest
import pytest_mock
from fastapi.testclient import TestClient

from conftest import create_test_sessionmaker, override_get_db
from vyom.crud import profiles
from vyom.crud.profiles import analyze_style, get_or_create_profile
from vyom.database.connection import get_db
from vyom.schemas.users import QuizAnswers
from vyom.services.profile import app


@pytest.fixture()
def client(session_factory):
    app.dependency_overrides[get_db] = override_get_db(session_factory)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_first_read_creates_default_profile(client, auth_headers) -> None:
    response = client.get("/profile", headers=auth_headers)

    assert response.status_code == 200
    profile = response.json()["profile"]
    assert profile["user_id"] == "user-1"
    assert profile["display_name"] == "ada"
    assert profile["style_personality"] == []
    assert profile["preferences"]["budget"] == {"min": 0, "max": 1000}
    assert profile["settings"]["notifications"] is True
    assert profile["sizes"] == {"top": "", "bottom": "", "shoes": "", "dress": ""}

    again = client.get("/profile", headers=auth_headers).json()["profile"]
    assert again["created_at"] == profile["created_at"]


def test_update_profile_ignores_identity_fields(client, auth_headers) -> None:
    response = client.put(
        "/profile",
        json={
            "user_id": "someone-else",
            "bio": "Minimalist",
            "favorite_colors": ["navy", "white"],
            "location": {"city": "Lisbon", "country": "PT"},
        },
        headers=auth_headers,
    )

    assert response.status_code == 200
    profile = response.json()["profile"]
    assert profile["user_id"] == "user-1"
    assert profile["bio"] == "Minimalist"
    assert profile["favorite_colors"] == ["navy", "white"]
    assert profile["location"] == {"city": "Lisbon", "country": "PT", "timezone": ""}
    assert profile["display_name"] == "ada"


def test_update_profile_accepts_camel_case(client, auth_headers) -> None:
    response = client.put(
        "/profile",
        json={
            "displayName": "Ada L.",
            "favoriteColors": ["teal"],
            "preferences": {"sustainabilityFocus": True, "budget": {"min": 10, "max": 200}},
            "settings": {"publicProfile": True},
        },
        headers=auth_headers,
    )

    profile = response.json()["profile"]
    assert profile["display_name"] == "Ada L."
    assert profile["favorite_colors"] == ["teal"]
    assert profile["preferences"]["sustainability_focus"] is True
    assert profile["preferences"]["budget"] == {"min": 10, "max": 200}
    assert profile["settings"]["public_profile"] is True


def test_style_quiz(client, auth_headers) -> None:
    response = client.post(
        "/style-quiz",
        json={"answers": {"lifestyle": "professional", "colors": "bold", "fit": "fitted"}},
        headers=auth_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["style_personality"] == ["business-casual", "bold", "tailored"]
    assert body["recommendations"]["colors"] == ["red", "blue", "green"]
    assert body["recommendations"]["brands"] == ["Hugo Boss", "Calvin Klein"]

    profile = client.get("/profile", headers=auth_headers).json()["profile"]
    assert profile["quiz_completed"] is True
    assert profile["style_personality"] == ["business-casual", "bold", "tailored"]


@pytest.mark.parametrize(
    "answers, expected",
    [
        ({"lifestyle": "active", "colors": "neutral", "fit": "loose"}, ["athletic", "minimalist", "comfortable"]),
        ({"lifestyle": "Creative", "colors": "pastels", "fit": "oversized"}, ["artistic", "feminine", "trendy"]),
        ({"lifestyle": "unknown"}, []),
        ({}, []),
    ],
)
def test_analyze_style(answers, expected) -> None:
    assert analyze_style(QuizAnswers(**answers)) == expected


def test_recommendations_without_profile(client, auth_headers) -> None:
    recommendations = client.get("/recommendations/personal", headers=auth_headers).json()["recommendations"]

    assert "Complete your profile" in recommendations["message"]
    assert "Take the style quiz" in recommendations["suggestions"]


def test_recommendations_follow_the_profile(client, auth_headers) -> None:
    client.post(
        "/style-quiz",
        json={"answers": {"lifestyle": "professional", "colors": "neutral"}},
        headers=auth_headers,
    )

    recommendations = client.get("/recommendations/personal", headers=auth_headers).json()["recommendations"]

    assert recommendations["styles"] == ["business-casual", "minimalist"]
    assert recommendations["colors"] == ["navy", "white", "black"]
    assert len(recommendations["tips"]) == 2


def test_profile_routes_require_a_token(client) -> None:
    assert client.get("/profile").status_code == 401
    assert client.post("/style-quiz", json={"answers": {}}).status_code == 401


@pytest.mark.asyncio
async def test_concurrent_first_read_returns_the_existing_profile(tmp_path, mocker: pytest_mock.MockerFixture) -> None:
    engine, factory = await create_test_sessionmaker(tmp_path / "profiles.db")
    try:
        async with factory() as session:
            created = await get_or_create_profile(session, "user-1", "ada@example.com")

        real_get_profile = profiles.get_profile
        calls = []

        async def lost_race(db, user_id):
            # The first lookup misses, as if the other request had not committed yet
            calls.append(user_id)
            if len(calls) == 1:
                return None
            return await real_get_profile(db, user_id)

        mocker.patch("vyom.crud.profiles.get_profile", side_effect=lost_race)
        async with factory() as session:
            profile = await get_or_create_profile(session, "user-1", "ada@example.com")
            profile_id = profile.id
    finally:
        await engine.dispose()

    assert profile_id == created.id
    assert len(calls) == 2
