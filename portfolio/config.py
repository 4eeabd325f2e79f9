"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables, with an optional .env file
as a fallback. The .env file is gitignored and holds local secrets.

Pydantic Settings automatically:
  1. Reads from environment variables (highest priority)
  2. Falls back to .env file values
  3. Uses defaults defined here (lowest priority)

A Settings instance is built once at process start and handed to
create_app(), which passes it on to the token issuer and the database.
No module imports a shared instance.

Usage:
    from portfolio.config import Settings
    from portfolio.main import create_app

    app = create_app(Settings())
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration for the Portfolio API.

    Required fields (no defaults) MUST be set in .env or environment:
      - SECRET_KEY: Used to sign JWT tokens
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # --- Application ---
    APP_NAME: str = "Portfolio API"
    APP_VERSION: str = "0.1.0"
    # "production" hides stack traces in error responses
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # --- Server ---
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # --- Database ---
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/portfolio.db"

    # --- Authentication ---
    # REQUIRED: No default, so a real secret must be provided
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30

    # --- CORS ---
    # Vite dev server and Create React App
    ALLOWED_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"
