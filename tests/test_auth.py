"""Tests for cookie authentication on protected routes."""

from datetime import timedelta

import jwt
import pytest

from restaurant_api.core.exceptions import InvalidToken
from restaurant_api.core.security import TokenVerifier, get_token_verifier
from restaurant_api.database import get_db
from restaurant_api.main import app
from tests.factories import create_restaurant, create_user


def cookie(token: str) -> dict[str, str]:
    return {"Cookie": f"token={token}"}


async def test_missing_cookie_is_rejected_before_store_access(client):
    async def no_database():
        raise AssertionError("database accessed by unauthenticated request")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = no_database

    response = await client.get("/api/v1/restaurant")

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "User not authenticated"}


async def test_missing_cookie_on_multipart_route(client, image_service):
    response = await client.post(
        "/api/v1/menu",
        data={"name": "Quiche", "description": "Lorraine", "price": "9.5"},
        files={"image": ("quiche.jpg", b"\xff\xd8jpeg", "image/jpeg")},
    )

    assert response.status_code == 401
    assert image_service.uploads == []


@pytest.mark.parametrize(
    "token",
    [
        "not-a-jwt",
        jwt.encode({"userId": 1, "exp": 4102444800}, "some-other-secret", algorithm="HS256"),
    ],
    ids=["garbage", "wrong-secret"],
)
async def test_invalid_token_is_rejected(client, token):
    response = await client.get("/api/v1/restaurant", headers=cookie(token))

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Invalid token"}


async def test_expired_token_is_rejected(client):
    token = get_token_verifier().issue(1, ttl=timedelta(seconds=-5))

    response = await client.get("/api/v1/restaurant", headers=cookie(token))

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


async def test_token_without_user_claim_is_rejected(client):
    token = jwt.encode({"sub": "1", "exp": 4102444800}, "test-secret-key", algorithm="HS256")

    response = await client.get("/api/v1/restaurant", headers=cookie(token))

    assert response.status_code == 401


async def test_verifier_failure_is_internal_error(client):
    class BrokenVerifier:
        def verify(self, token):
            raise RuntimeError("keystore offline")

    app.dependency_overrides[get_token_verifier] = lambda: BrokenVerifier()

    response = await client.get("/api/v1/restaurant", headers=cookie("anything"))

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error"}


async def test_valid_token_reaches_handler_as_caller(client, database, auth):
    user_id = await create_user(database)
    await create_restaurant(database, user_id, restaurant_name="Caller's Place")

    response = await client.get("/api/v1/restaurant", headers=auth(user_id))

    assert response.status_code == 200
    assert response.json()["restaurant"]["restaurant_name"] == "Caller's Place"


def test_verifier_reads_user_id_claim():
    verifier = TokenVerifier(secret_key="s3cret")

    assert verifier.verify(verifier.issue(42)) == 42


def test_verifier_rejects_token_from_other_secret():
    token = TokenVerifier(secret_key="one").issue(42)

    with pytest.raises(InvalidToken):
        TokenVerifier(secret_key="two").verify(token)


def test_verifier_requires_secret():
    with pytest.raises(ValueError):
        TokenVerifier(secret_key="")
