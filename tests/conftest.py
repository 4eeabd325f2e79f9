"""
Test fixtures for the Portfolio API test suite.

This module provides shared fixtures used across all test files:

  - settings: Settings for a test instance (fixed secret, in-memory database)
  - database: Fresh in-memory SQLite database with all tables, per test
  - app: An application built by create_app() around that database
  - client: Async HTTP test client (unauthenticated)
  - authenticated_client: Its own client with a registered user and JWT
  - second_authenticated_client: A second user for cross-user tests
  - token_store / api: The client package wired to the in-process app

Key design decisions:
  - In-memory SQLite (sqlite+aiosqlite://) keeps every test isolated.
  - create_app() receives the test Settings and Database directly, so no
    dependency overrides are needed and production code runs unchanged.
  - The authenticated clients register through the real endpoint and each
    keeps its own Authorization header.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from portfolio.config import Settings
from portfolio.database import Database
from portfolio.main import create_app
from portfolio_client.api import PortfolioAPI
from portfolio_client.storage import TokenStore


# In-memory SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite://"
BASE_URL = "http://test"

OWNER = {"name": "Test Owner", "email": "owner@example.com", "password": "SecurePass123"}
OTHER = {"name": "Other User", "email": "other@example.com", "password": "SecurePass456"}


async def register(client: AsyncClient, user: dict) -> dict:
    """Register through the API and return the response body."""
    response = await client.post("/api/users", json=user)
    assert response.status_code == 201, f"Registration failed: {response.text}"
    return response.json()


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        SECRET_KEY="test-secret-key-not-for-production",
        DATABASE_URL=TEST_DATABASE_URL,
        ENVIRONMENT="test",
    )


@pytest_asyncio.fixture
async def database(settings):
    """A fresh database with all tables for each test."""
    database = Database(settings)
    await database.create_all()
    yield database
    await database.dispose()


@pytest.fixture
def app(settings, database):
    return create_app(settings, database)


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as ac:
        yield ac


@pytest_asyncio.fixture
async def authenticated_client(app):
    """
    Test client logged in as OWNER.

    Registers via the real endpoint, then sets the Authorization header on
    this client only.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as ac:
        data = await register(ac, OWNER)
        ac.headers["Authorization"] = f"Bearer {data['token']}"
        yield ac


@pytest_asyncio.fixture
async def second_authenticated_client(app):
    """
    A second, independent client logged in as OTHER.

    Use this alongside authenticated_client to verify that one user cannot
    change another user's records.
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BASE_URL) as ac:
        data = await register(ac, OTHER)
        ac.headers["Authorization"] = f"Bearer {data['token']}"
        yield ac


@pytest.fixture
def token_store(tmp_path):
    return TokenStore(tmp_path / "storage.json")


@pytest_asyncio.fixture
async def api(app, token_store):
    """PortfolioAPI talking to the in-process app."""
    async with PortfolioAPI(BASE_URL, token_store, transport=ASGITransport(app=app)) as portfolio_api:
        yield portfolio_api
