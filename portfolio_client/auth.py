"""
Client-side authentication state.

AuthContext mirrors what the browser app keeps: the current user, a loading
flag while the stored token is being checked, and whether anyone is logged
in. The token itself lives in the TokenStore so it outlives the process.
"""

import logging

import httpx

from portfolio_client.api import APIError, PortfolioAPI
from portfolio_client.storage import TokenStore

logger = logging.getLogger(__name__)


class AuthContext:
    def __init__(self, api: PortfolioAPI, store: TokenStore):
        self.api = api
        self.store = store
        self.user: dict | None = None
        self.loading = True

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    async def initialize(self) -> dict | None:
        """
        Restore the session from a stored token.

        A token the server rejects (expired, forged, or belonging to a
        deleted user) is removed, and the user is treated as logged out.
        """
        self.loading = True
        try:
            if self.store.get() is None:
                self.user = None
                return None
            try:
                self.user = await self.api.users.get_me()
            except (APIError, httpx.HTTPError) as exc:
                logger.info("Discarding stored token: %s", exc)
                self.store.remove()
                self.user = None
            return self.user
        finally:
            self.loading = False

    async def login(self, email: str, password: str) -> dict:
        data = await self.api.users.login(email, password)
        return self._start_session(data)

    async def register(self, name: str, email: str, password: str) -> dict:
        data = await self.api.users.register(name, email, password)
        return self._start_session(data)

    def logout(self) -> None:
        self.store.remove()
        self.user = None

    def _start_session(self, data: dict) -> dict:
        self.store.set(data["token"])
        self.user = {"id": data["_id"], "name": data["name"], "email": data["email"]}
        self.loading = False
        return self.user
