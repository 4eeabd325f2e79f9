"""
Tests for the error response format.

Every error leaves the API as {"message": ..., "stack": ...}. The stack is a
traceback string outside production and null in production.
"""

from httpx import AsyncClient, ASGITransport

from portfolio.config import Settings
from portfolio.database import Database
from portfolio.exceptions import (
    DuplicateSkillError,
    NotAuthorizedError,
    ResourceNotFoundError,
    error_body,
)
from portfolio.main import create_app


def _raised(exc: Exception) -> Exception:
    try:
        raise exc
    except Exception as caught:
        return caught


class TestErrorBody:

    def test_stack_outside_production(self, settings):
        body = error_body(_raised(ValueError("boom")), "Something failed", settings)
        assert body["message"] == "Something failed"
        assert "ValueError: boom" in body["stack"]

    def test_no_stack_in_production(self):
        production = Settings(_env_file=None, SECRET_KEY="k", ENVIRONMENT="production")
        body = error_body(_raised(ValueError("boom")), "Something failed", production)
        assert body == {"message": "Something failed", "stack": None}


class TestErrorMessages:

    def test_not_found_message(self):
        error = ResourceNotFoundError("Project")
        assert error.detail == "Project not found"
        assert error.status_code == 400

    def test_duplicate_skill_message(self):
        error = DuplicateSkillError("React", "Frontend")
        assert error.detail == "Skill 'React' already exists in the Frontend category"

    def test_not_authorized_status(self):
        assert NotAuthorizedError().status_code == 401


class TestErrorResponses:

    async def test_unknown_route(self, client):
        response = await client.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json()["message"] == "Not Found"

    async def test_validation_error_is_400(self, authenticated_client):
        response = await authenticated_client.post(
            "/api/projects",
            json={"title": "x", "description": "y", "startDate": "not a date"},
        )
        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid value for startDate")

    async def test_production_hides_stack(self):
        settings = Settings(
            _env_file=None,
            SECRET_KEY="k",
            DATABASE_URL="sqlite+aiosqlite://",
            ENVIRONMENT="production",
        )
        database = Database(settings)
        await database.create_all()
        try:
            app = create_app(settings, database)
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
                response = await ac.get("/api/projects")
            assert response.status_code == 401
            assert response.json() == {"message": "Not authorized, no token", "stack": None}
        finally:
            await database.dispose()

    async def test_health(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
