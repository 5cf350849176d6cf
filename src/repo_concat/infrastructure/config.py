"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from repo_concat.domain.value_objects import ProcessingLimits


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: SecretStr | None = None
    archive_base_url: str = "https://codeload.github.com"
    user_agent: str = "repo-concat/1.0"
    http_timeout: float = 30.0
    max_display_file_size_kb: int = 30
    max_file_size_kb: int = 500
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    def token(self) -> str | None:
        return self.github_token.get_secret_value() if self.github_token else None

    def processing_limits(self) -> ProcessingLimits:
        return ProcessingLimits(
            max_display_bytes=self.max_display_file_size_kb * 1024,
            max_file_bytes=self.max_file_size_kb * 1024,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
