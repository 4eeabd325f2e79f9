"""
Tests for the authorization gate on protected endpoints.

A request is let through only with "Authorization: Bearer <token>" where the
token carries a valid signature, has not expired, and names a user that
still exists. Every rejection is a 401:
  - no header, or a non-Bearer scheme: "Not authorized, no token"
  - anything else: "Not authorized"
"""

import uuid
from datetime import timedelta

from jose import jwt
from sqlalchemy import delete

from portfolio.config import Settings
from portfolio.models.user import User
from portfolio.security import TokenIssuer


async def _me(client, token: str):
    return await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})


class TestMissingToken:

    async def test_no_header(self, client):
        response = await client.get("/api/projects")
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, no token"

    async def test_wrong_scheme(self, client):
        """A Basic header doesn't count as a bearer token."""
        response = await client.get(
            "/api/projects",
            headers={"Authorization": "Basic dXNlcjpwYXNz"},
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, no token"

    async def test_error_body_shape(self, client):
        """Outside production the error body carries a stack string."""
        response = await client.get("/api/goals")
        body = response.json()
        assert set(body) == {"message", "stack"}
        assert isinstance(body["stack"], str)


class TestInvalidToken:

    async def test_malformed_token(self, client):
        response = await _me(client, "not.a.jwt")
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized"

    async def test_forged_token(self, authenticated_client, client, settings):
        """A token signed with a different secret is rejected."""
        me = (await authenticated_client.get("/api/users/me")).json()
        forger = TokenIssuer(Settings(_env_file=None, SECRET_KEY="someone-elses-secret"))

        response = await _me(client, forger.issue(uuid.UUID(me["id"])))
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized"

    async def test_expired_token(self, authenticated_client, client, app):
        me = (await authenticated_client.get("/api/users/me")).json()
        issuer: TokenIssuer = app.state.token_issuer
        token = issuer.issue(uuid.UUID(me["id"]), expires_delta=timedelta(seconds=-1))

        response = await _me(client, token)
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized"

    async def test_subject_not_a_user_id(self, client, settings):
        token = jwt.encode({"sub": "admin"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        response = await _me(client, token)
        assert response.status_code == 401

    async def test_unknown_user(self, client, app):
        """A well-signed token for a user id that was never registered."""
        token = app.state.token_issuer.issue(uuid.uuid4())
        response = await _me(client, token)
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized"

    async def test_deleted_user(self, authenticated_client, database):
        """A token stops working once its user is gone."""
        me = (await authenticated_client.get("/api/users/me")).json()

        async with database.session() as session:
            await session.execute(delete(User).where(User.id == uuid.UUID(me["id"])))

        response = await authenticated_client.get("/api/users/me")
        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized"


class TestValidToken:

    async def test_valid_token_passes(self, authenticated_client):
        response = await authenticated_client.get("/api/projects")
        assert response.status_code == 200
        assert response.json() == []

    async def test_public_endpoints_need_no_token(self, client):
        assert (await client.get("/api/projects/featured")).status_code == 200
        assert (await client.get("/api/skills")).status_code == 200
        assert (await client.get("/api/skills/category/Frontend")).status_code == 200
