"""
GitHub API gateway for commit status notifications.

Validation is layered: credentials, then repository, then commit. Each layer
raises its own error so a failure is attributable to exactly one cause.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

import httpx

from ghnotify.core.exceptions import (
    CommitNotFoundError,
    CredentialsInvalidError,
    CredentialsNotFoundError,
    CredentialsNullError,
    CredentialsUnsupportedError,
    DeliveryError,
    RepositoryNotFoundError,
)
from ghnotify.core.logging import get_logger
from ghnotify.models.credentials import SECRET_TEXT, USERNAME_PASSWORD, Credential
from ghnotify.models.notification import CommitState
from ghnotify.services.credentials import CredentialStore
from ghnotify.services.proxy import ProxyConfiguration
from .schemas import PUBLIC_API_URL, Commit, CommitStatus, GitHubSession, Repository

logger = get_logger(__name__)


class GitHubGateway:
    """Authenticates against GitHub and reads/writes what a status update needs."""

    def __init__(
        self,
        credential_store: CredentialStore,
        proxy_config: ProxyConfiguration | None = None,
        api_url: str = PUBLIC_API_URL,
        timeout: float = 30.0,
    ) -> None:
        self._credential_store = credential_store
        self._proxy_config = proxy_config or ProxyConfiguration()
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    def _token_for(self, credential: Credential) -> tuple[str, str]:
        """Return (token, login) for a supported credential shape."""
        if credential.kind == USERNAME_PASSWORD:
            return credential.password, credential.username
        if credential.kind == SECRET_TEXT:
            return credential.secret, ""
        raise CredentialsUnsupportedError()

    def build_session(
        self,
        credentials_id: str | None,
        api_url: str | None = None,
        scope: Any = None,
    ) -> GitHubSession:
        """
        Turn a credential id into session parameters, without network access.

        Raises:
            CredentialsNullError: If the id is None or empty
            CredentialsNotFoundError: If the store does not know the id
            CredentialsUnsupportedError: If the credential shape cannot hold a token
        """
        if not credentials_id:
            raise CredentialsNullError()

        credential = self._credential_store.lookup(credentials_id, scope)
        if credential is None:
            raise CredentialsNotFoundError()

        token, login = self._token_for(credential)

        if api_url:
            endpoint = api_url.rstrip("/")
            proxy = self._proxy_config.create_proxy(api_url)
        else:
            endpoint = self._api_url
            proxy = self._proxy_config.create_proxy(self._api_url)

        return GitHubSession(
            api_url=endpoint,
            token=token,
            login=login,
            proxy=proxy,
            timeout=self._timeout,
        )

    async def _get(
        self,
        session: GitHubSession,
        url: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        async with httpx.AsyncClient(proxy=session.proxy, timeout=session.timeout) as client:
            response = await client.get(url, headers=session.headers, params=params)
        response.raise_for_status()
        return response

    async def _post(
        self,
        session: GitHubSession,
        url: str,
        payload: dict[str, Any],
    ) -> httpx.Response:
        async with httpx.AsyncClient(proxy=session.proxy, timeout=session.timeout) as client:
            response = await client.post(url, headers=session.headers, json=payload)
        response.raise_for_status()
        return response

    async def authenticate(
        self,
        credentials_id: str | None,
        api_url: str | None = None,
        scope: Any = None,
    ) -> GitHubSession:
        """
        Build a session and check that GitHub accepts its token.

        Args:
            credentials_id: Id in the credential store
            api_url: GitHub Enterprise API endpoint, None for github.com
            scope: Opaque handle passed to the credential store

        Returns:
            Validated session

        Raises:
            CredentialsError: Subclass naming the exact credential problem
        """
        session = self.build_session(credentials_id, api_url, scope)

        try:
            response = await self._get(session, session.url("/user"))
        except httpx.HTTPError as e:
            logger.warning(f"Credential check against {session.api_url} failed: {e}")
            raise CredentialsInvalidError() from e

        if not session.login:
            try:
                login = (response.json() or {}).get("login", "")
            except (ValueError, AttributeError) as e:
                logger.warning(f"Unreadable /user reply from {session.api_url}: {e}")
                raise CredentialsInvalidError() from e
            session = replace(session, login=login)
        logger.debug(f"Authenticated to {session.api_url} as {session.login or '<token>'}")
        return session

    async def fetch_repository(self, session: GitHubSession, full_name: str | None) -> Repository:
        """
        Find a repository among those the authenticated user can access.

        Args:
            session: Validated session
            full_name: Repository as "owner/name", matched exactly

        Returns:
            The matching repository

        Raises:
            RepositoryNotFoundError: If no accessible repository matches
        """
        if not full_name:
            raise RepositoryNotFoundError()

        url: str | None = session.url("/user/repos")
        params: dict[str, Any] | None = {"per_page": 100}

        try:
            while url:
                response = await self._get(session, url, params)
                for item in response.json():
                    if item.get("full_name") == full_name:
                        return Repository.from_api(item)
                # next page URL already carries the query string
                url = response.links.get("next", {}).get("url")
                params = None
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning(f"Listing repositories for {full_name} failed: {e}")
            raise RepositoryNotFoundError() from e

        raise RepositoryNotFoundError()

    async def fetch_commit(self, session: GitHubSession, repository: Repository, sha: str | None) -> Commit:
        """
        Fetch a commit by full or abbreviated SHA.

        Raises:
            CommitNotFoundError: If the commit is absent or the lookup fails
        """
        if not sha:
            raise CommitNotFoundError()

        url = session.url(f"/repos/{repository.full_name}/commits/{sha}")
        try:
            response = await self._get(session, url)
        except httpx.HTTPError as e:
            logger.warning(f"Commit {sha} lookup in {repository.full_name} failed: {e}")
            raise CommitNotFoundError() from e

        try:
            return Commit.from_api(response.json())
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Unreadable commit reply for {sha} in {repository.full_name}: {e}")
            raise CommitNotFoundError() from e

    async def post_status(
        self,
        session: GitHubSession,
        repository: Repository,
        sha: str,
        state: CommitState,
        target_url: str | None,
        description: str,
        context: str,
    ) -> CommitStatus:
        """
        Create a commit status. One request, no retry.

        Returns:
            The created status as echoed by GitHub, or one rebuilt from the
            request (id 0) when the 201 reply body is unreadable

        Raises:
            DeliveryError: If GitHub rejects the status or the request fails
        """
        url = session.url(f"/repos/{repository.full_name}/statuses/{sha}")
        payload = {
            "state": CommitState.parse(state).value,
            "target_url": target_url,
            "description": description,
            "context": context,
        }

        try:
            response = await self._post(session, url, payload)
        except httpx.HTTPStatusError as exc:
            logger.error(
                "GitHub status API error %s: %s", exc.response.status_code, exc.response.text
            )
            raise DeliveryError(
                f"{DeliveryError.message}: HTTP {exc.response.status_code}"
            ) from exc
        except httpx.RequestError as exc:
            logger.error("GitHub status request failed: %s", exc)
            raise DeliveryError(f"{DeliveryError.message}: {exc}") from exc

        try:
            return CommitStatus.from_api(response.json())
        except (ValueError, KeyError, TypeError) as e:
            # accepted by GitHub, only the echo is unreadable
            logger.warning(f"Status posted on {repository.full_name}@{sha} but reply was unreadable: {e}")
            return CommitStatus(
                id=0,
                state=payload["state"],
                context=context,
                description=description,
                target_url=target_url,
            )

    async def open_repository(
        self,
        credentials_id: str | None,
        repo: str | None,
        api_url: str | None = None,
        scope: Any = None,
    ) -> tuple[GitHubSession, Repository]:
        """Authenticate, then fetch the repository."""
        session = await self.authenticate(credentials_id, api_url, scope)
        repository = await self.fetch_repository(session, repo)
        return session, repository

    async def open_commit(
        self,
        credentials_id: str | None,
        repo: str | None,
        sha: str | None,
        api_url: str | None = None,
        scope: Any = None,
    ) -> tuple[GitHubSession, Repository, Commit]:
        """Authenticate, fetch the repository, then the commit."""
        session, repository = await self.open_repository(credentials_id, repo, api_url, scope)
        commit = await self.fetch_commit(session, repository, sha)
        return session, repository, commit
