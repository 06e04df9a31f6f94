"""
Pytest configuration and shared fixtures.
"""

import os
import sys
import pytest
import httpx
from unittest.mock import AsyncMock, patch

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


API = "https://api.github.com"
FULL_SHA = "abc123" + "0" * 34


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def mock_env(monkeypatch):
    """Set up test environment variables."""
    for name in ("PROXY_URL", "NO_PROXY_HOSTS", "CREDENTIALS_FILE", "GITHUB_API_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GITHUB_TIMEOUT", "5")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")


# ============================================================================
# HTTP Fixtures
# ============================================================================

@pytest.fixture
def api_response():
    """Factory for real httpx responses bound to a request."""
    def _make(status_code=200, json=None, url=f"{API}/user", method="GET", headers=None):
        request = httpx.Request(method, url)
        if json is None:
            return httpx.Response(status_code, request=request, headers=headers)
        return httpx.Response(status_code, json=json, request=request, headers=headers)
    return _make


@pytest.fixture
def mock_httpx():
    """Patch httpx.AsyncClient; yields the class mock."""
    with patch("httpx.AsyncClient") as mock:
        client_instance = AsyncMock()
        mock.return_value.__aenter__.return_value = client_instance
        yield mock


@pytest.fixture
def mock_httpx_client(mock_httpx):
    """The client instance every ``async with httpx.AsyncClient()`` yields."""
    return mock_httpx.return_value.__aenter__.return_value


@pytest.fixture
def github_api(mock_httpx_client, api_response):
    """
    Script a happy-path GitHub: valid token, org/app visible, commit abc123
    resolving to FULL_SHA, status creation accepted.
    """
    mock_httpx_client.get.side_effect = [
        api_response(json={"login": "ci-bot"}),
        api_response(
            json=[
                {"full_name": "org/other", "name": "other", "owner": {"login": "org"}},
                {"full_name": "org/app", "name": "app", "owner": {"login": "org"}},
            ],
            url=f"{API}/user/repos",
        ),
        api_response(json={"sha": FULL_SHA}, url=f"{API}/repos/org/app/commits/abc123"),
    ]
    mock_httpx_client.post.return_value = api_response(
        status_code=201,
        json={
            "id": 1,
            "state": "success",
            "context": "jenkins/githubnotify",
            "description": "Build passed",
            "target_url": "https://ci.example.com/job/app/job/main/7/",
        },
        url=f"{API}/repos/org/app/statuses/{FULL_SHA}",
        method="POST",
    )
    return mock_httpx_client


# ============================================================================
# Domain Fixtures
# ============================================================================

@pytest.fixture
def credential_store():
    """Store holding one credential of each shape."""
    from ghnotify.models.credentials import (
        SecretTextCredential,
        SSHKeyCredential,
        UsernamePasswordCredential,
    )
    from ghnotify.services.credentials import InMemoryCredentialStore

    return InMemoryCredentialStore([
        SecretTextCredential(id="cred1", secret="ghp_token"),
        UsernamePasswordCredential(id="userpass", username="ci-user", password="ghp_pat"),
        SSHKeyCredential(id="ssh", username="git", private_key="-----BEGIN KEY-----"),
    ])


@pytest.fixture
def gateway(credential_store):
    """Create a GitHubGateway against the public endpoint, no proxy."""
    from ghnotify.services.github import GitHubGateway
    return GitHubGateway(credential_store, timeout=5.0)


@pytest.fixture
def github_session():
    """A session as returned by a successful authenticate()."""
    from ghnotify.services.github import GitHubSession
    return GitHubSession(api_url=API, token="ghp_token", login="ci-bot", timeout=5.0)


@pytest.fixture
def repository():
    from ghnotify.services.github import Repository
    return Repository(full_name="org/app", name="app", owner="org")


@pytest.fixture
def github_source():
    from ghnotify.models.build import ScmSource
    return ScmSource(
        kind="github",
        repo_owner="org",
        repository="app",
        scan_credentials_id="cred1",
    )


@pytest.fixture
def make_build(github_source):
    """Factory for a build of a branch job inside a multi-branch project."""
    from ghnotify.models.build import Build, BranchRevision, ItemGroup, Job

    default_revision = BranchRevision(branch="main", hash="abc123")

    def _make(revision=default_revision, sources=None, number=7):
        project = ItemGroup(
            name="app",
            scm_sources=[github_source] if sources is None else sources,
        )
        job = Job(name="main", parent=project)
        return Build(
            job=job,
            number=number,
            url=f"https://ci.example.com/job/app/job/main/{number}/",
            revision=revision,
        )
    return _make


@pytest.fixture
def build(make_build):
    return make_build()


@pytest.fixture
def full_sha():
    """Canonical SHA the scripted API returns for commit abc123."""
    return FULL_SHA
