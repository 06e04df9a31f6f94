"""
The ``githubNotify`` pipeline step.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Mapping

from ghnotify.core.logging import get_logger
from ghnotify.models.build import Build
from ghnotify.models.notification import DEFAULT_CONTEXT, CommitState, NotificationRequest
from ghnotify.services.github import CommitStatus
from ghnotify.services.notifier import StatusNotifier

logger = get_logger(__name__)

FUNCTION_NAME = "githubNotify"
DISPLAY_NAME = "Notifies GitHub of the status of a Pull Request"

# Engine argument name -> step field
ARGUMENTS = {
    "status": "status",
    "description": "description",
    "context": "context",
    "repo": "repo",
    "sha": "sha",
    "gitApiUrl": "git_api_url",
    "credentialsId": "credentials_id",
    "targetUrl": "target_url",
}
REQUIRED_ARGUMENTS = ("status", "description")


@dataclass
class GitHubNotifyStep:
    """Step configuration as written in a pipeline script."""

    status: CommitState
    description: str
    context: str = DEFAULT_CONTEXT
    repo: str | None = None
    sha: str | None = None
    git_api_url: str | None = None
    credentials_id: str | None = None
    target_url: str | None = None

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "GitHubNotifyStep":
        """
        Build a step from the engine's argument map.

        Args:
            arguments: Step arguments keyed by their pipeline names
                (``credentialsId``, ``gitApiUrl``, ...)

        Raises:
            ValueError: On a missing required or an unknown argument
        """
        unknown = sorted(set(arguments) - set(ARGUMENTS))
        if unknown:
            raise ValueError(f"{FUNCTION_NAME}: unknown argument(s) {', '.join(unknown)}")
        missing = [name for name in REQUIRED_ARGUMENTS if not arguments.get(name)]
        if missing:
            raise ValueError(f"{FUNCTION_NAME}: missing required argument(s) {', '.join(missing)}")

        kwargs = {ARGUMENTS[name]: value for name, value in arguments.items()}
        kwargs["status"] = CommitState.parse(kwargs["status"])
        return cls(**kwargs)

    def to_request(self) -> NotificationRequest:
        return NotificationRequest(
            status=self.status,
            description=self.description,
            context=self.context,
            repo=self.repo,
            sha=self.sha,
            credentials_id=self.credentials_id,
            git_api_url=self.git_api_url,
            target_url=self.target_url,
        )

    async def run_async(self, build: Build, notifier: StatusNotifier) -> CommitStatus:
        return await notifier.notify(self.to_request(), build)

    def run(self, build: Build, notifier: StatusNotifier) -> CommitStatus:
        """
        Execute the step, blocking the calling worker thread until done.

        Meant for the engine's per-step worker; must not be called from a
        thread that is already running an event loop.
        """
        logger.debug(f"Running {FUNCTION_NAME} for {build.display_name}")
        return asyncio.run(self.run_async(build, notifier))
