"""Application configuration loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Account area service settings."""

    # App
    app_env: str = "development"
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # Upstream platform API
    platform_api_url: str = "http://localhost:5000"
    platform_api_timeout: float = 10.0

    # Public origin used when building shareable links
    site_origin: str = "http://localhost:5173"

    # Orders tab
    orders_per_page: int = Field(default=15, ge=1)

    # CORS
    cors_origins: str = "*"  # Comma-separated origins; "*" for dev only

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def is_testing(self) -> bool:
        return self.app_env == "testing"

    @property
    def cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if self.cors_origins == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
