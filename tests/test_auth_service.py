"""Auth service: registration, login and /me."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from fastapi.testclient import TestClient

from conftest import override_get_db
from vyom.config import config
from vyom.database.connection import get_db
from vyom.security import create_access_token, decode_access_token, hash_password, verify_password
from vyom.services.auth import app


@pytest.fixture()
def client(session_factory):
    app.dependency_overrides[get_db] = override_get_db(session_factory)
    yield TestClient(app)
    app.dependency_overrides.clear()


def _register(client, email="ada@example.com", password="s3cret"):
    return client.post("/register", json={"email": email, "full_name": "Ada Lovelace", "password": password})


def test_register_returns_token_and_user(client) -> None:
    response = _register(client, email="  Ada@Example.com ")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"]["email"] == "ada@example.com"
    assert body["user"]["role"] == "USER"
    assert "password" not in body["user"] and "password_hash" not in body["user"]

    identity = decode_access_token(body["token"])
    assert identity.uuid == body["user"]["uuid"]
    assert identity.email == "ada@example.com"


def test_duplicate_registration_is_rejected(client) -> None:
    _register(client)

    response = _register(client, email="ADA@example.com")

    assert response.status_code == 400
    assert response.json()["error"] == "User already exists"


def test_login(client) -> None:
    registered = _register(client).json()

    response = client.post("/login", json={"email": "ada@example.com", "password": "s3cret"})

    assert response.status_code == 200
    assert response.json()["user"]["uuid"] == registered["user"]["uuid"]


@pytest.mark.parametrize(
    "email, password",
    [("ada@example.com", "wrong"), ("nobody@example.com", "s3cret"), ("ada@example.com", "any")],
)
def test_login_rejects_bad_credentials(client, email, password) -> None:
    _register(client)

    response = client.post("/login", json={"email": email, "password": password})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid credentials"


def test_me(client) -> None:
    token = _register(client).json()["token"]

    response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json()["user"]["full_name"] == "Ada Lovelace"


def test_me_without_or_with_bad_token(client) -> None:
    assert client.get("/me").status_code == 401
    assert client.get("/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_me_with_expired_token(client) -> None:
    token = create_access_token(
        {"user_id": 1, "uuid": "u", "email": "ada@example.com", "role": "USER"},
        expires_delta=timedelta(minutes=-1),
    )

    assert client.get("/me", headers={"Authorization": f"Bearer {token}"}).status_code == 401


def test_me_for_deleted_user(client) -> None:
    token = create_access_token({"user_id": 999, "uuid": "u", "email": "ghost@example.com", "role": "USER"})

    response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 404


def test_token_without_claims_is_invalid() -> None:
    token = jwt.encode({"sub": "someone"}, config.SECRET_KEY, algorithm=config.ALGORITHM)

    with pytest.raises(jwt.InvalidTokenError):
        decode_access_token(token)


def test_password_hashing() -> None:
    hashed = hash_password("hunter2")

    assert hashed != "hunter2"
    assert verify_password("hunter2", hashed)
    assert not verify_password("hunter3", hashed)
    assert not verify_password("hunter2", "not-a-bcrypt-hash")
