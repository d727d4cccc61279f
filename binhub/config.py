"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded for production)
    - get_settings() is cached (lru_cache) — single instance per process
    - push_url falls back to the origin of api_base_url when not set

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works against a local API out of the box
"""

from functools import lru_cache
from urllib.parse import urlsplit

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="BINHUB_", case_sensitive=False,
    )

    # Marketplace REST API
    api_base_url: str = "http://localhost:5000/api"
    api_timeout_seconds: float = 15.0

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # Push channel (Socket.IO)
    push_url: str | None = None
    push_enabled: bool = True
    push_heartbeat_seconds: float = 20.0
    push_connect_timeout_seconds: float = 5.0

    # Browser session (signed cookie)
    session_secret: str = "change-me-in-production"
    session_cookie: str = "binhub_session"
    session_max_age_seconds: int = 7 * 24 * 3600
    https_only_cookies: bool = False

    # Views
    recent_requests_limit: int = 5

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def resolved_push_url(self) -> str:
        """Socket.IO server URL: explicit push_url, else the API origin."""
        if self.push_url:
            return self.push_url.rstrip("/")
        parts = urlsplit(self.api_base_url)
        return f"{parts.scheme}://{parts.netloc}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
