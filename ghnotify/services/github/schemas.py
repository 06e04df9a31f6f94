"""
Data schemas for GitHub API objects.
"""

from dataclasses import dataclass, field
from typing import Any


PUBLIC_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class GitHubSession:
    """Authenticated connection parameters for one notification."""

    api_url: str
    token: str = field(repr=False)
    login: str = ""
    proxy: str | None = None
    timeout: float = 30.0

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github.v3+json",
        }

    def url(self, path: str) -> str:
        return f"{self.api_url}{path}"


@dataclass(frozen=True)
class Repository:
    """Repository visible to the authenticated user."""

    full_name: str
    name: str
    owner: str
    html_url: str = ""
    private: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Repository":
        return cls(
            full_name=data["full_name"],
            name=data.get("name", ""),
            owner=(data.get("owner") or {}).get("login", ""),
            html_url=data.get("html_url", ""),
            private=bool(data.get("private", False)),
        )


@dataclass(frozen=True)
class Commit:
    """Commit as returned by the API, with its full-length SHA."""

    sha: str
    html_url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Commit":
        return cls(sha=data["sha"], html_url=data.get("html_url", ""))


@dataclass(frozen=True)
class CommitStatus:
    """Status entry created on a commit."""

    id: int
    state: str
    context: str
    description: str | None = None
    target_url: str | None = None
    url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CommitStatus":
        return cls(
            id=data.get("id", 0),
            state=data["state"],
            context=data.get("context", ""),
            description=data.get("description"),
            target_url=data.get("target_url"),
            url=data.get("url", ""),
        )
