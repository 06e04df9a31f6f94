"""
Application configuration using pydantic-settings.
All environment variables are validated and typed.
"""

import os
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Public GitHub API endpoint, used when a step does not name an Enterprise one
    github_api_url: str = "https://api.github.com"
    github_timeout: float = 30.0

    # Outbound proxy for GitHub traffic
    proxy_url: str | None = None
    # Hosts that bypass the proxy (comma/space separated globs)
    no_proxy_hosts: str | None = None

    # JSON credential store
    credentials_file: str | None = None

    # Validation probe server
    probe_host: str = "0.0.0.0"
    probe_port: int = 8081

    log_level: str = "INFO"

    @field_validator("proxy_url", "no_proxy_hosts", "credentials_file", mode="before")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None

    @field_validator("github_api_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def no_proxy_patterns(self) -> list[str]:
        """Get parsed no-proxy host patterns."""
        if not self.no_proxy_hosts:
            return []
        return [token for token in self.no_proxy_hosts.replace(",", " ").split() if token]

    model_config = {
        "env_file": os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Singleton settings instance
settings = Settings()
