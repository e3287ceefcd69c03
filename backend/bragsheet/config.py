"""
Application configuration loaded from environment variables.

Uses Pydantic Settings to:
1. Read from .env file automatically
2. Validate values at startup
3. Provide type-safe access throughout the app

Usage:
    from bragsheet.config import settings
    print(settings.APPLICATION_DESCRIPTION_LIMIT)

The application-format limits approximate the real limits of the
standardized application forms. They live here rather than in the
renderer so a school can tune them without a code change.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """All application configuration in one place."""

    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file
        env_file_encoding="utf-8",
        case_sensitive=True,     # ENV_VAR must match exactly
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def prefer_dotenv_over_empty_env(cls, data):
        """If an env var is empty but .env has a value, use the .env value.

        Pydantic Settings prioritizes real env vars over .env file values,
        so an exported-but-blank variable would shadow a real value in
        .env. Fill in any blanks from the file.
        """
        from dotenv import dotenv_values

        dotenv_vals = dotenv_values(".env")
        for key, dotenv_value in dotenv_vals.items():
            if dotenv_value and (key not in data or not data.get(key)):
                data[key] = dotenv_value
        return data

    # --- Application ---
    APP_ENV: str = "development"
    DEBUG: bool = True
    CORS_ORIGINS: str = "http://localhost:3000"

    # --- Output ---
    DOCUMENT_LABEL: str = "Brag_Sheet"
    DOCUMENT_AUTHOR: str = "Student Portfolio"

    # --- Image fetching (professional style) ---
    IMAGE_FETCH_TIMEOUT_SECONDS: float = 10.0
    IMAGE_MAX_BYTES: int = 5 * 1024 * 1024
    MAX_IMAGES_PER_ENTRY: int = 3

    # --- Application-format limits ---
    APPLICATION_DESCRIPTION_LIMIT: int = 150
    APPLICATION_INSIGHT_LIMIT: int = 500
    APPLICATION_MAX_HONORS: int = 5
    APPLICATION_MAX_ACTIVITIES: int = 10

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]


# Singleton instance, import this everywhere
settings = Settings()
