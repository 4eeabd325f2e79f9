"""
User service — registration, login and password change.

This module contains the auth business logic, separated from HTTP concerns.
The router calls these functions and translates the results into HTTP
responses.

Registration flow:
  1. Require name, email and password
  2. Reject an email that is already registered
  3. Hash the password with Argon2id and store the user
  4. Return a JWT so the user is immediately logged in

Login flow:
  1. Look up user by email, normalized the way registration stored it
  2. Verify password against stored hash
  3. Return a JWT

Login returns the same error for "wrong password" and "email not found"
so valid emails can't be enumerated.
"""

import logging
import uuid

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidRequestError,
    NotAuthenticatedError,
)
from portfolio.models.user import User
from portfolio.security import TokenIssuer, hash_password, verify_password

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str | None:
    """
    The form EmailStr stores: domain lowercased, Unicode normalized.

    Returns None for an address that does not parse.
    """
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError:
        return None


async def register(
    db: AsyncSession,
    issuer: TokenIssuer,
    name: str | None,
    email: str | None,
    password: str | None,
) -> tuple[User, str]:
    """
    Register a new user.

    Returns:
        Tuple of (User instance, JWT token string).

    Raises:
        InvalidRequestError: If any field is missing.
        DuplicateEmailError: If the email is already registered.
    """
    if not name or not email or not password:
        raise InvalidRequestError("Please add all fields")

    email = normalize_email(email)
    if email is None:
        raise InvalidRequestError("Please add a valid email")

    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none() is not None:
        raise DuplicateEmailError(email)

    user = User(
        name=name,
        email=email,
        hashed_password=hash_password(password),
    )
    db.add(user)
    # Flush to get user.id assigned before signing the token. A concurrent
    # registration that passed the check above trips the unique index here.
    try:
        await db.flush()
    except IntegrityError as exc:
        logger.info("Duplicate registration for %s", email)
        raise DuplicateEmailError(email) from exc

    logger.info("Registered user %s", user.email)
    return user, issuer.issue(user.id)


async def login(
    db: AsyncSession,
    issuer: TokenIssuer,
    email: str | None,
    password: str | None,
) -> tuple[User, str]:
    """
    Authenticate a user and return a JWT token.

    Raises:
        InvalidCredentialsError: If email doesn't exist or password is wrong.
    """
    if not email or not password:
        raise InvalidCredentialsError()

    normalized = normalize_email(email)
    if normalized is None:
        raise InvalidCredentialsError()

    result = await db.execute(select(User).where(User.email == normalized))
    user = result.scalar_one_or_none()

    # Same error for both cases
    if user is None or not verify_password(password, user.hashed_password):
        logger.info("Failed login for %s", email)
        raise InvalidCredentialsError()

    logger.info("User %s logged in", user.email)
    return user, issuer.issue(user.id)


async def get_user(db: AsyncSession, user_id: uuid.UUID) -> User:
    """Load a user by id; a vanished user is treated as an authentication failure."""
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotAuthenticatedError("Not authorized")
    return user


async def change_password(
    db: AsyncSession,
    user_id: uuid.UUID,
    current_password: str | None,
    new_password: str | None,
) -> None:
    """
    Replace a user's password after checking the current one.

    Tokens issued before the change remain valid until they expire.

    Raises:
        InvalidRequestError: If a field is missing or the new password is too short.
        InvalidCredentialsError: If current_password doesn't match.
    """
    if not current_password or not new_password:
        raise InvalidRequestError("Please provide current and new password")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise InvalidRequestError(
            f"New password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    user = await get_user(db, user_id)
    if not verify_password(current_password, user.hashed_password):
        raise InvalidCredentialsError("Invalid current password")

    user.hashed_password = hash_password(new_password)
    await db.flush()
    logger.info("Password changed for %s", user.email)
