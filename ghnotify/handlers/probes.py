"""
Validation probes for the step configuration form.

Each probe runs the same validation chain as a real notification and turns
its error into a field-level message instead of raising.
"""

from dataclasses import dataclass
from typing import Any

from ghnotify.core.exceptions import NotifyError
from ghnotify.core.logging import get_logger
from ghnotify.services.github import GitHubGateway

logger = get_logger(__name__)

OK = "ok"
ERROR = "error"


@dataclass(frozen=True)
class FormValidation:
    """Outcome of a probe, rendered next to a form field."""

    kind: str
    message: str

    @classmethod
    def ok(cls, message: str) -> "FormValidation":
        return cls(OK, message)

    @classmethod
    def error(cls, message: str) -> "FormValidation":
        return cls(ERROR, message)

    @property
    def is_ok(self) -> bool:
        return self.kind == OK

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


async def test_connection(
    gateway: GitHubGateway,
    credentials_id: str | None,
    git_api_url: str | None = None,
    scope: Any = None,
) -> FormValidation:
    """Check that the credentials log in to GitHub."""
    try:
        await gateway.authenticate(credentials_id, git_api_url or None, scope)
    except NotifyError as e:
        logger.info(f"Connection probe failed: {e}")
        return FormValidation.error(str(e))
    return FormValidation.ok("Success")


async def check_repo(
    gateway: GitHubGateway,
    credentials_id: str | None,
    repo: str | None,
    git_api_url: str | None = None,
    scope: Any = None,
) -> FormValidation:
    """Check that the credentials can see the repository."""
    try:
        await gateway.open_repository(credentials_id, repo, git_api_url or None, scope)
    except NotifyError as e:
        logger.info(f"Repository probe for {repo} failed: {e}")
        return FormValidation.error(str(e))
    return FormValidation.ok("Success")


async def check_sha(
    gateway: GitHubGateway,
    credentials_id: str | None,
    repo: str | None,
    sha: str | None,
    git_api_url: str | None = None,
    scope: Any = None,
) -> FormValidation:
    """Check that the commit exists in the repository."""
    try:
        await gateway.open_commit(credentials_id, repo, sha, git_api_url or None, scope)
    except NotifyError as e:
        logger.info(f"Commit probe for {repo}@{sha} failed: {e}")
        return FormValidation.error(str(e))
    return FormValidation.ok("Commit seems valid")
