"""
SpeakerDesk Backend — Session Route Tests
==========================================

What:  Sign-up, sign-in, sign-out, /users/me and /health.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.config import DEFAULT_SECRET_KEY, Settings
from app.security import hash_password, verify_password

PASSWORD = "password"


def user_payload(username: str) -> dict:
    return {
        "firstName": "Full",
        "lastName": "Name",
        "displayName": "Full Name",
        "email": f"{username}@test.com",
        "username": username,
        "password": PASSWORD,
    }


class TestPasswordHashing:

    def test_round_trip(self):
        stored = hash_password("s3cret")
        assert verify_password("s3cret", stored)
        assert not verify_password("wrong", stored)

    def test_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_garbage_hash_never_verifies(self):
        assert not verify_password("anything", "not-a-hash")


class TestSignUp:

    @pytest.mark.asyncio
    async def test_sign_up_starts_session(self, test_client):
        response = await test_client.post("/auth/signup", json=user_payload("username"))

        assert response.status_code == 200
        body = response.json()
        assert body["username"] == "username"
        assert body["displayName"] == "Full Name"
        assert "password" not in body
        assert "password_hash" not in body

        me = await test_client.get("/users/me")
        assert me.status_code == 200
        assert me.json()["_id"] == body["_id"]

    @pytest.mark.asyncio
    async def test_display_name_defaults_to_full_name(self, test_client):
        payload = user_payload("username")
        del payload["displayName"]

        response = await test_client.post("/auth/signup", json=payload)

        assert response.json()["displayName"] == "Full Name"

    @pytest.mark.asyncio
    async def test_duplicate_username(self, test_client, client_factory):
        await test_client.post("/auth/signup", json=user_payload("username"))

        response = await client_factory().post("/auth/signup", json=user_payload("username"))

        assert response.status_code == 400
        assert response.json()["message"] == "Username already exists"


class TestSignIn:

    @pytest.mark.asyncio
    async def test_sign_in(self, test_client, client_factory):
        await test_client.post("/auth/signup", json=user_payload("username"))
        fresh = client_factory()

        response = await fresh.post(
            "/auth/signin", json={"username": "username", "password": PASSWORD}
        )

        assert response.status_code == 200
        assert (await fresh.get("/users/me")).status_code == 200

    @pytest.mark.asyncio
    async def test_wrong_password(self, test_client):
        await test_client.post("/auth/signup", json=user_payload("username"))
        await test_client.get("/auth/signout")

        response = await test_client.post(
            "/auth/signin", json={"username": "username", "password": "nope"}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Unknown user or invalid password"
        assert (await test_client.get("/users/me")).status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_user(self, test_client):
        response = await test_client.post(
            "/auth/signin", json={"username": "ghost", "password": PASSWORD}
        )
        assert response.status_code == 400


class TestSignOut:

    @pytest.mark.asyncio
    async def test_sign_out_ends_session(self, owner_client):
        response = await owner_client.get("/auth/signout")
        assert response.status_code == 200

        me = await owner_client.get("/users/me")
        assert me.status_code == 401
        assert me.json()["message"] == "User is not logged in"

        create = await owner_client.post("/speakers", json={"name": "Speaker Name"})
        assert create.status_code == 401


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/speakers", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_health_unhealthy_when_database_unreachable(self, test_client, monkeypatch):
        broken = MagicMock()
        broken.connect.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
        monkeypatch.setattr("app.routes.health.engine", broken)

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"


class TestProductionSettings:

    def test_default_secret_key_rejected(self):
        with pytest.raises(ValueError, match="SECRET_KEY is not set"):
            Settings(secret_key=DEFAULT_SECRET_KEY).validate_required_for_production()

    def test_empty_secret_key_rejected(self):
        with pytest.raises(ValueError):
            Settings(secret_key="").validate_required_for_production()

    def test_real_secret_key_accepted(self):
        Settings(secret_key="a-real-secret").validate_required_for_production()
