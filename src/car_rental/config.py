"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    access_token_secret: str
    firebase_api_key: str
    firebase_base_url: str = "https://identitytoolkit.googleapis.com/v1"
    session_cookie_name: str = "token"
    session_ttl_days: int = 7
    jwt_algorithm: str = "HS256"
    cors_allowed_origins: str = "http://localhost:5173"
    environment: str = _ENVIRONMENT
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Return true when running in production."""
        return self.environment == "production"


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse the comma-separated CORS origin list from env."""
    if raw is None:
        return []
    origins: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip().rstrip("/")
        if value and value not in origins:
            origins.append(value)
    return origins
