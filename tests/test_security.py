"""Tests for token issuing, verification and role gating."""

import time

import pytest

from tourism_api.app.core.security import create_access_token, decode_access_token

from .support import auth_headers


class TestTokens:
    def test_round_trip_keeps_subject(self):
        token = create_access_token({"sub": "a@example.com"})
        claims = decode_access_token(token)
        assert claims["sub"] == "a@example.com"
        assert claims["exp"] > time.time()

    def test_default_lifetime_is_five_hours(self):
        claims = decode_access_token(create_access_token({"sub": "a@example.com"}))
        assert abs(claims["exp"] - (time.time() + 5 * 3600)) < 5

    def test_expired_token_is_rejected(self):
        token = create_access_token({"sub": "a@example.com"}, expires_delta=-10)
        assert decode_access_token(token) is None

    def test_tampered_payload_is_rejected(self):
        header, _, signature = create_access_token({"sub": "a@example.com"}).split(".")
        forged = create_access_token({"sub": "admin@example.com"}).split(".")[1]
        assert decode_access_token(f"{header}.{forged}.{signature}") is None

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "!!.??.##"])
    def test_malformed_tokens_are_rejected(self, token):
        assert decode_access_token(token) is None

    def test_token_without_subject_is_rejected(self):
        assert decode_access_token(create_access_token({"email": "a@example.com"})) is None


class TestJwtEndpoint:
    async def test_issues_verifiable_token(self, async_client):
        response = await async_client.post("/api/v1/jwt", json={"email": "a@example.com"})
        assert response.status_code == 200
        assert decode_access_token(response.json()["token"])["sub"] == "a@example.com"

    async def test_missing_email_is_a_validation_error(self, async_client):
        response = await async_client.post("/api/v1/jwt", json={})
        assert response.status_code == 400
        assert response.json()["message"] == "validation error"


class TestGate:
    async def test_missing_token_is_unauthorized(self, async_client, admin):
        response = await async_client.get("/api/v1/users/")
        assert response.status_code == 401
        assert response.json() == {"message": "unauthorized access"}

    async def test_invalid_token_is_unauthorized(self, async_client, admin):
        response = await async_client.get("/api/v1/users/", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    async def test_role_mismatch_is_forbidden(self, async_client, tourist):
        response = await async_client.get("/api/v1/users/", headers=auth_headers(tourist["email"]))
        assert response.status_code == 403
        assert response.json() == {"message": "forbidden access"}

    async def test_unknown_user_is_forbidden(self, async_client):
        response = await async_client.get("/api/v1/users/", headers=auth_headers("ghost@example.com"))
        assert response.status_code == 403

    async def test_role_is_read_from_store_not_token(self, async_client, db, tourist):
        headers = auth_headers(tourist["email"])
        assert (await async_client.get("/api/v1/users/", headers=headers)).status_code == 403
        await db.users.update_one({"_id": tourist["_id"]}, {"$set": {"role": "admin"}})
        assert (await async_client.get("/api/v1/users/", headers=headers)).status_code == 200
