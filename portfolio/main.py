"""
FastAPI application factory and entry point.

create_app() builds a fully configured application from a Settings object:
  1. Lifespan manager — creates tables on startup, disposes the engine on shutdown
  2. CORS middleware — allows the browser frontend to call the API
  3. Exception handlers — maps domain errors to {message, stack} responses
  4. Router registration — mounts the users, projects, skills and goals groups

Running locally:
    uvicorn portfolio.main:create_default_app --factory --reload
or
    portfolio-api

Nothing is configured at import time. Each call to create_app() owns its
own database and token issuer.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio.config import Settings
from portfolio.database import Database
from portfolio.exceptions import register_exception_handlers
from portfolio.routers import goals, projects, skills, users
from portfolio.security import TokenIssuer

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Send application logs to stderr at the configured level."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings, database: Database | None = None) -> FastAPI:
    """
    Build the Portfolio API application.

    Args:
        settings: Configuration for this application instance.
        database: Optional pre-built Database. Defaults to one built from
            settings.DATABASE_URL.

    Returns:
        The configured FastAPI application.
    """
    database = database or Database(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup creates any missing tables. Shutdown disposes of the engine,
        closing all connections cleanly.
        """
        # --- Startup ---
        await database.create_all()
        logger.info("%s %s started (%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
        yield
        # --- Shutdown ---
        await database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Portfolio REST API with projects, skills and goals",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.token_issuer = TokenIssuer(settings)

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Exception handlers
    # -----------------------------------------------------------------------

    register_exception_handlers(app, settings)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------

    app.include_router(users.router, prefix="/api/users", tags=["Users"])
    app.include_router(projects.router, prefix="/api/projects", tags=["Projects"])
    app.include_router(skills.router, prefix="/api/skills", tags=["Skills"])
    app.include_router(goals.router, prefix="/api/goals", tags=["Goals"])

    # -----------------------------------------------------------------------
    # Health check
    # -----------------------------------------------------------------------

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Liveness probe for deployment tooling."""
        return {"status": "ok", "version": settings.APP_VERSION}

    return app


def create_default_app() -> FastAPI:
    """Factory for `uvicorn portfolio.main:create_default_app --factory`."""
    settings = Settings()
    configure_logging(settings)
    return create_app(settings)


def run() -> None:
    """Console entry point: read settings from the environment and serve."""
    import uvicorn

    settings = Settings()
    configure_logging(settings)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)
