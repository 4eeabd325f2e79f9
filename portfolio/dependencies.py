"""
FastAPI dependencies for authentication.

Every protected endpoint declares `user: AuthenticatedUser =
Depends(get_current_user)`. FastAPI runs the gate before the route handler;
if it raises, the handler never runs.

  get_current_user (Authorization header -> JWT -> User row -> AuthenticatedUser)

The gate:
  - rejects a missing header (or a non-Bearer scheme) with
    "Not authorized, no token"
  - rejects a token that fails verification, or whose user no longer
    exists, with "Not authorized"
  - otherwise returns an AuthenticatedUser, an immutable value without the
    password hash, which handlers pass on to the services explicitly

Every request verifies the token and loads the user again. Nothing is cached.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.database import get_db
from portfolio.exceptions import NotAuthenticatedError
from portfolio.models.user import User
from portfolio.security import InvalidTokenError, TokenIssuer

logger = logging.getLogger(__name__)

# HTTPBearer parses "Authorization: Bearer <token>" and registers the scheme
# with OpenAPI (Swagger UI's "Authorize" button). auto_error=False lets the
# gate produce its own error message.
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    """The identity attached to one request once its token has been verified."""
    id: uuid.UUID
    name: str
    email: str
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "AuthenticatedUser":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            created_at=user.created_at,
        )


def get_token_issuer(request: Request) -> TokenIssuer:
    """The app's TokenIssuer, created from Settings in create_app()."""
    return request.app.state.token_issuer


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    issuer: TokenIssuer = Depends(get_token_issuer),
    db: AsyncSession = Depends(get_db),
) -> AuthenticatedUser:
    """
    Resolve the bearer token to the authenticated user.

    Raises:
        NotAuthenticatedError: "Not authorized, no token" when no bearer token
            is sent; "Not authorized" when it fails verification or names a
            user that doesn't exist.
    """
    if credentials is None or not credentials.credentials:
        raise NotAuthenticatedError("Not authorized, no token")

    try:
        user_id = issuer.verify(credentials.credentials)
    except InvalidTokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise NotAuthenticatedError("Not authorized")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None:
        logger.info("Rejected bearer token for unknown user %s", user_id)
        raise NotAuthenticatedError("Not authorized")

    return AuthenticatedUser.from_user(user)
