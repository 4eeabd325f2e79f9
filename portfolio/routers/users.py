"""
Users router — registration, login and the current identity.

Endpoints:
  POST /api/users                  — Register and get a token        (public)
  POST /api/users/login            — Authenticate and get a token    (public)
  GET  /api/users/me               — Current identity                (bearer)
  POST /api/users/change-password  — Replace the password            (bearer)

Plaintext passwords exist only in memory during request processing; they
are hashed before any database operation and never logged.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.database import get_db
from portfolio.dependencies import AuthenticatedUser, get_current_user, get_token_issuer
from portfolio.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    UserLoginRequest,
    UserRegisterRequest,
)
from portfolio.schemas.common import MessageResponse
from portfolio.schemas.user import UserResponse
from portfolio.security import TokenIssuer
from portfolio.services import user_service

router = APIRouter()


@router.post(
    "",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register_user(
    request: UserRegisterRequest,
    issuer: TokenIssuer = Depends(get_token_issuer),
    db: AsyncSession = Depends(get_db),
):
    """
    Register the site owner.

    Returns the new identity plus a JWT, so the user is logged in at once.

    - **name**, **email**, **password**: all required
    """
    user, token = await user_service.register(
        db=db,
        issuer=issuer,
        name=request.name,
        email=request.email,
        password=request.password,
    )
    return AuthResponse(id=user.id, name=user.name, email=user.email, token=token)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Authenticate and get a token",
)
async def login_user(
    request: UserLoginRequest,
    issuer: TokenIssuer = Depends(get_token_issuer),
    db: AsyncSession = Depends(get_db),
):
    """
    Authenticate with email and password.

    Send the returned token on every protected request:

        Authorization: Bearer <token>

    The token expires after ACCESS_TOKEN_EXPIRE_DAYS (default: 30).
    """
    user, token = await user_service.login(
        db=db,
        issuer=issuer,
        email=request.email,
        password=request.password,
    )
    return AuthResponse(id=user.id, name=user.name, email=user.email, token=token)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get the current user",
)
async def get_me(user: AuthenticatedUser = Depends(get_current_user)):
    return user


@router.post(
    "/change-password",
    response_model=MessageResponse,
    summary="Change your password",
)
async def change_password(
    request: ChangePasswordRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Replace the password after verifying the current one.

    - **currentPassword**: must match the stored password
    - **newPassword**: at least 6 characters
    """
    await user_service.change_password(
        db=db,
        user_id=user.id,
        current_password=request.current_password,
        new_password=request.new_password,
    )
    return MessageResponse(message="Password updated successfully")
