"""
Send one commit status for a build, inferring whatever the caller left out.
"""

from typing import Any

from ghnotify.core.exceptions import CommitNotFoundError
from ghnotify.core.logging import get_logger
from ghnotify.models.build import Build
from ghnotify.models.notification import NotificationRequest
from ghnotify.services.github import CommitStatus, GitHubGateway
from ghnotify.services.resolver import ContextResolver, default_resolver

logger = get_logger(__name__)


class StatusNotifier:
    """Resolves a notification request and delivers it through the gateway."""

    def __init__(self, gateway: GitHubGateway, resolver: ContextResolver | None = None):
        self._gateway = gateway
        self._resolver = resolver or default_resolver

    @property
    def gateway(self) -> GitHubGateway:
        return self._gateway

    async def notify(
        self,
        request: NotificationRequest,
        build: Build,
        scope: Any = None,
    ) -> CommitStatus:
        """
        Resolve missing request fields and post the commit status.

        Explicit request values always win; inference only runs for fields
        the request leaves empty. The first failure aborts the whole
        notification and nothing is posted.

        Args:
            request: Notification to send
            build: Build being reported on
            scope: Credential lookup scope, defaults to the build's job

        Returns:
            The status created on GitHub

        Raises:
            NotifyError: Subclass naming the first failed step
        """
        if scope is None:
            scope = build.job

        target_url = request.target_url or build.url
        credentials_id = request.credentials_id or self._resolver.infer_credentials_id(build)
        repo = request.repo or self._resolver.infer_repository(build)

        session, repository = await self._gateway.open_repository(
            credentials_id, repo, request.git_api_url, scope
        )

        sha = request.sha or self._resolver.infer_commit_sha(build)
        try:
            commit = await self._gateway.fetch_commit(session, repository, sha)
        except CommitNotFoundError:
            raise
        except Exception as e:
            raise CommitNotFoundError() from e

        # GitHub gets the full SHA from the commit lookup, never the input value
        status = await self._gateway.post_status(
            session,
            repository,
            commit.sha,
            request.status,
            target_url,
            request.description,
            request.context,
        )
        logger.info(
            f"Set {request.context} to {request.status.value} on "
            f"{repository.full_name}@{commit.sha} for {build.display_name}"
        )
        return status
