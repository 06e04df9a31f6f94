"""
Data model for a single commit status notification.
"""

from dataclasses import dataclass
from enum import Enum


DEFAULT_CONTEXT = "jenkins/githubnotify"


class CommitState(str, Enum):
    """Commit status states accepted by the GitHub Statuses API."""

    SUCCESS = "success"
    FAILURE = "failure"
    ERROR = "error"
    PENDING = "pending"

    @classmethod
    def parse(cls, value: "str | CommitState") -> "CommitState":
        """Accept a member, its name ("SUCCESS") or its wire value ("success")."""
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        try:
            return cls[key.upper()]
        except KeyError:
            pass
        try:
            return cls(key.lower())
        except ValueError:
            raise ValueError(f"Unknown commit state: {value!r}") from None


def fix_empty(value: str | None) -> str | None:
    """Return None for None or an empty string, the value otherwise."""
    if value is None or value == "":
        return None
    return value


@dataclass
class NotificationRequest:
    """A possibly incomplete request to set a commit status."""

    status: CommitState
    description: str
    context: str = DEFAULT_CONTEXT
    repo: str | None = None
    sha: str | None = None
    credentials_id: str | None = None
    git_api_url: str | None = None
    target_url: str | None = None

    def __post_init__(self) -> None:
        self.status = CommitState.parse(self.status)
        self.context = self.context or DEFAULT_CONTEXT
        self.repo = fix_empty(self.repo)
        self.sha = fix_empty(self.sha)
        self.credentials_id = fix_empty(self.credentials_id)
        self.git_api_url = fix_empty(self.git_api_url)
        self.target_url = fix_empty(self.target_url)
