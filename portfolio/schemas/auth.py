"""
Pydantic schemas for registration, login and password change.

Request fields are optional at the schema level: the service layer checks
presence itself so that a missing field produces the API's own 400 message
("Please add all fields") rather than a generic validation error. Type and
format problems (a malformed email, for instance) are still rejected by
pydantic and reported as 400 by the exception handlers.
"""

import uuid

from pydantic import EmailStr, Field

from portfolio.schemas.common import CamelModel


class UserRegisterRequest(CamelModel):
    """Request body for POST /api/users."""
    name: str | None = None
    email: EmailStr | None = None
    password: str | None = None


class UserLoginRequest(CamelModel):
    """Request body for POST /api/users/login."""
    email: str | None = None
    password: str | None = None


class ChangePasswordRequest(CamelModel):
    """Request body for POST /api/users/change-password."""
    current_password: str | None = None
    new_password: str | None = None


class AuthResponse(CamelModel):
    """Response body for successful registration/login — identity + JWT."""
    id: uuid.UUID = Field(alias="_id")
    name: str
    email: str
    token: str
