"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Fallback credentials for requests that carry no token of their own.
    # Each is only sent to its own provider: the GitHub API origin, or a
    # host listed in gitlab_hosts.
    github_token: SecretStr | None = None
    gitlab_token: SecretStr | None = None
    gitlab_hosts: list[str] = ["gitlab.com"]
    github_api_url: str = "https://api.github.com"
    gitlab_scheme: str = "https"
    gitlab_tree_page_size: int = 100
    http_timeout: float = 30.0
    user_agent: str = "repo-exporter/1.0"
    text_filename: str = "prompt.txt"
    archive_filename: str = "partial_repo.zip"
    listing_limit: int = 500
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
