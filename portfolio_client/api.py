"""
Async HTTP client for the Portfolio API.

PortfolioAPI wraps one httpx.AsyncClient and groups the endpoints the way
the server does:

    api.users     register, login, get_me, change_password
    api.projects  get_featured, get_filtered, create, update, delete
    api.skills    get_all, get_by_category, get_mine, add, update, delete
    api.goals     get_all, create, update, delete

Every request carries "Authorization: Bearer <token>" when the TokenStore
holds a token. Non-2xx responses raise APIError with the server's message.

Usage:
    async with PortfolioAPI("http://localhost:5000", TokenStore()) as api:
        featured = await api.projects.get_featured()

Tests pass transport=httpx.ASGITransport(app=app) to talk to an
in-process application.
"""

import logging
from urllib.parse import quote

import httpx

from portfolio_client.storage import TokenStore

logger = logging.getLogger(__name__)


class APIError(Exception):
    """A request the server answered with an error status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def handle_api_error(exc: BaseException) -> str:
    """Turn any exception raised by a client call into a displayable string."""
    if isinstance(exc, APIError):
        return exc.message
    if isinstance(exc, httpx.TimeoutException):
        return "The server took too long to respond"
    if isinstance(exc, httpx.HTTPError):
        return f"Could not reach the server: {exc}"
    return str(exc) or "An unexpected error occurred"


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase or f"Request failed with status {response.status_code}"


# ---------------------------------------------------------------------------
# Endpoint groups
# ---------------------------------------------------------------------------

class _EndpointGroup:
    def __init__(self, api: "PortfolioAPI"):
        self._api = api


class UsersAPI(_EndpointGroup):
    async def register(self, name: str, email: str, password: str) -> dict:
        return await self._api.request(
            "POST", "/api/users", json={"name": name, "email": email, "password": password}
        )

    async def login(self, email: str, password: str) -> dict:
        return await self._api.request(
            "POST", "/api/users/login", json={"email": email, "password": password}
        )

    async def get_me(self) -> dict:
        return await self._api.request("GET", "/api/users/me")

    async def change_password(self, current_password: str, new_password: str) -> dict:
        return await self._api.request(
            "POST",
            "/api/users/change-password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )


class ProjectsAPI(_EndpointGroup):
    async def get_featured(self) -> list[dict]:
        return await self._api.request("GET", "/api/projects/featured")

    async def get_filtered(self, filters: dict | None = None) -> list[dict]:
        """List your projects. Empty filter values are not sent."""
        params = {key: value for key, value in (filters or {}).items() if value not in (None, "")}
        return await self._api.request("GET", "/api/projects", params=params)

    async def create(self, data: dict) -> dict:
        return await self._api.request("POST", "/api/projects", json=data)

    async def update(self, project_id: str, data: dict) -> dict:
        return await self._api.request("PUT", f"/api/projects/{project_id}", json=data)

    async def delete(self, project_id: str) -> dict:
        return await self._api.request("DELETE", f"/api/projects/{project_id}")


class SkillsAPI(_EndpointGroup):
    async def get_all(self) -> list[dict]:
        return await self._api.request("GET", "/api/skills")

    async def get_by_category(self, category: str) -> list[dict]:
        # "/" stays literal so "AI/ML" reaches the path converter intact
        return await self._api.request("GET", f"/api/skills/category/{quote(category, safe='/')}")

    async def get_mine(self) -> list[dict]:
        return await self._api.request("GET", "/api/skills/me")

    async def add(self, data: dict) -> dict:
        return await self._api.request("POST", "/api/skills", json=data)

    async def update(self, skill_id: str, data: dict) -> dict:
        return await self._api.request("PUT", f"/api/skills/{skill_id}", json=data)

    async def delete(self, skill_id: str) -> dict:
        return await self._api.request("DELETE", f"/api/skills/{skill_id}")


class GoalsAPI(_EndpointGroup):
    async def get_all(self) -> list[dict]:
        return await self._api.request("GET", "/api/goals")

    async def create(self, data: dict) -> dict:
        return await self._api.request("POST", "/api/goals", json=data)

    async def update(self, goal_id: str, data: dict) -> dict:
        return await self._api.request("PUT", f"/api/goals/{goal_id}", json=data)

    async def delete(self, goal_id: str) -> dict:
        return await self._api.request("DELETE", f"/api/goals/{goal_id}")


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class PortfolioAPI:
    """Entry point for all client calls."""

    def __init__(
        self,
        base_url: str,
        store: TokenStore,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
    ):
        self.store = store
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)
        self.users = UsersAPI(self)
        self.projects = ProjectsAPI(self)
        self.skills = SkillsAPI(self)
        self.goals = GoalsAPI(self)

    def _auth_headers(self) -> dict:
        token = self.store.get()
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def request(self, method: str, path: str, **kwargs):
        """
        Send a request and return the decoded JSON body.

        Raises:
            APIError: If the server answers with a 4xx or 5xx status.
            httpx.HTTPError: If the server can't be reached.
        """
        response = await self._client.request(method, path, headers=self._auth_headers(), **kwargs)
        if response.is_error:
            message = _error_message(response)
            logger.debug("%s %s failed with %s: %s", method, path, response.status_code, message)
            raise APIError(message, response.status_code)
        return response.json()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "PortfolioAPI":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
