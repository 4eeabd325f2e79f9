"""
Custom exception classes and FastAPI exception handlers.

Services raise domain errors (like DuplicateSkillError) without importing
HTTP concepts. Each error class carries the status code it maps to, and a
single formatter turns any of them into the response body:

    {"message": "<error message>", "stack": "<traceback or null>"}

The stack is only included outside production.

Exception hierarchy:
    PortfolioAPIError (base)
    ├── InvalidRequestError      — missing or invalid fields (400)
    ├── NotAuthenticatedError    — missing/invalid/expired token (401)
    ├── NotAuthorizedError       — valid identity, wrong owner (401)
    ├── ResourceNotFoundError    — unknown project/skill/goal id (400)
    ├── DuplicateSkillError      — (name, category) already taken (400)
    ├── DuplicateEmailError      — registering an existing email (400)
    └── InvalidCredentialsError  — wrong email or password (400)

Not-found errors answer 400 rather than 404. Existing clients rely on it.
"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio.config import Settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class PortfolioAPIError(Exception):
    """Base exception for all Portfolio API domain errors."""

    status_code: int = 400

    def __init__(self, detail: str = "An error occurred"):
        self.detail = detail
        super().__init__(self.detail)


# ---------------------------------------------------------------------------
# Domain exceptions
# ---------------------------------------------------------------------------

class InvalidRequestError(PortfolioAPIError):
    """Raised when required fields are missing or a value is unusable."""

    status_code = 400


class NotAuthenticatedError(PortfolioAPIError):
    """Raised by the authorization gate when no usable bearer token is sent."""

    status_code = 401

    def __init__(self, detail: str = "Not authorized"):
        super().__init__(detail)


class NotAuthorizedError(PortfolioAPIError):
    """Raised when a user attempts to mutate a resource they don't own."""

    status_code = 401

    def __init__(self, detail: str = "User not authorized"):
        super().__init__(detail)


class ResourceNotFoundError(PortfolioAPIError):
    """Raised when a requested project, skill or goal does not exist."""

    status_code = 400

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"{resource} not found")


class DuplicateSkillError(PortfolioAPIError):
    """Raised when a skill name already exists (case-insensitively) in a category."""

    status_code = 400

    def __init__(self, name: str, category: str):
        self.name = name
        self.category = category
        super().__init__(f"Skill '{name}' already exists in the {category} category")


class DuplicateEmailError(PortfolioAPIError):
    """Raised when attempting to register with an email that's already in use."""

    status_code = 400

    def __init__(self, email: str):
        self.email = email
        super().__init__("User already exists")


class InvalidCredentialsError(PortfolioAPIError):
    """Raised when login credentials (or a current password) are incorrect."""

    status_code = 400

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(detail)


# ---------------------------------------------------------------------------
# Error formatting
# ---------------------------------------------------------------------------

def error_body(exc: BaseException, message: str, settings: Settings) -> dict:
    """Build the JSON error body. The stack is null in production."""
    stack = None
    if not settings.is_production:
        stack = "".join(traceback.format_exception(exc))
    return {"message": message, "stack": stack}


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if location:
        return f"Invalid value for {location}: {first.get('msg', 'invalid')}"
    return first.get("msg", "Invalid request")


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """
    Register the exception handlers with the FastAPI application.

    Domain errors, schema validation failures, framework HTTP errors and
    anything unexpected all leave through error_body(), so every error
    response has the same shape.

    This is called once from create_app().
    """

    @app.exception_handler(PortfolioAPIError)
    async def portfolio_error_handler(
        request: Request, exc: PortfolioAPIError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc, exc.detail, settings),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Schema failures are client errors like any other missing field
        return JSONResponse(
            status_code=400,
            content=error_body(exc, _validation_message(exc), settings),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc, str(exc.detail), settings),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_body(exc, "Internal server error", settings),
        )
