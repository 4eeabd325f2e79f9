"""
Security utilities: password hashing and JWT bearer tokens.

1. PASSWORD HASHING (Argon2)
   - Passwords are never stored in plaintext
   - Argon2id salts every hash and is memory-hard, so GPU cracking is slow
   - passlib's CryptContext handles hashing and verification

2. JWT TOKENS
   - After login or registration the user receives a signed JWT whose
     "sub" claim is their user ID
   - Tokens are signed with SECRET_KEY (HS256) and expire after
     ACCESS_TOKEN_EXPIRE_DAYS (default: 30 days)
   - There is no rotation and no server-side session storage

The TokenIssuer is built from the Settings object at app creation and lives
on app.state; nothing here reads configuration from a global.
"""

import uuid
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from portfolio.config import Settings


# ---------------------------------------------------------------------------
# 1. Password Hashing (Argon2)
# ---------------------------------------------------------------------------

# deprecated="auto" lets passlib re-verify old hashes if the scheme list
# ever changes, while new passwords always use the first scheme.
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """
    Hash a plaintext password using Argon2id.

    Returns:
        An Argon2 hash string (e.g., "$argon2id$v=19$m=65536,t=3,p=4$...").
    """
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against a stored Argon2 hash."""
    return pwd_context.verify(plain_password, hashed_password)


# ---------------------------------------------------------------------------
# 2. JWT Tokens
# ---------------------------------------------------------------------------

class InvalidTokenError(Exception):
    """Raised when a token is malformed, forged, expired or has no usable subject."""


class TokenIssuer:
    """
    Creates and verifies signed, time-limited bearer tokens.

    Usage:
        issuer = TokenIssuer(settings)
        token = issuer.issue(user.id)
        user_id = issuer.verify(token)   # raises InvalidTokenError
    """

    def __init__(self, settings: Settings):
        self._secret_key = settings.SECRET_KEY
        self._algorithm = settings.ALGORITHM
        self._lifetime = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    def issue(self, user_id: uuid.UUID, expires_delta: timedelta | None = None) -> str:
        """
        Create a signed JWT for a user.

        The payload contains:
          - "sub": the user ID as a string
          - "exp": expiration timestamp (30 days out unless overridden)
        """
        expire = datetime.now(timezone.utc) + (expires_delta or self._lifetime)
        payload = {"sub": str(user_id), "exp": expire}
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> uuid.UUID:
        """
        Validate a token's signature and expiry and return the embedded user ID.

        Raises:
            InvalidTokenError: On any failure. No claim of a bad token is used.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc

        subject = payload.get("sub")
        if not isinstance(subject, str):
            raise InvalidTokenError("Token has no subject")
        try:
            return uuid.UUID(subject)
        except ValueError as exc:
            raise InvalidTokenError("Token subject is not a user id") from exc
