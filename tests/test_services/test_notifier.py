"""
Tests for the notification orchestrator.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock


API = "https://api.github.com"


def _request(**kwargs):
    from ghnotify.models.notification import CommitState, NotificationRequest

    kwargs.setdefault("status", CommitState.SUCCESS)
    kwargs.setdefault("description", "Build passed")
    return NotificationRequest(**kwargs)


@pytest.fixture
def spy_resolver():
    """Real resolver wrapped so calls can be counted."""
    from ghnotify.services.resolver import ContextResolver
    return MagicMock(wraps=ContextResolver())


@pytest.fixture
def notifier(gateway, spy_resolver):
    from ghnotify.services.notifier import StatusNotifier
    return StatusNotifier(gateway, spy_resolver)


class TestNotify:
    """End-to-end tests for StatusNotifier.notify."""

    @pytest.mark.asyncio
    async def test_explicit_request(self, notifier, spy_resolver, github_api, build, full_sha):
        """Test explicit repo, sha and credentials post exactly one status."""
        request = _request(repo="org/app", sha="abc123", credentials_id="cred1")

        status = await notifier.notify(request, build)

        assert status.state == "success"
        github_api.post.assert_called_once()
        call = github_api.post.call_args
        assert call.args[0] == f"{API}/repos/org/app/statuses/{full_sha}"
        assert call.kwargs["json"] == {
            "state": "success",
            "target_url": "https://ci.example.com/job/app/job/main/7/",
            "description": "Build passed",
            "context": "jenkins/githubnotify",
        }

    @pytest.mark.asyncio
    async def test_explicit_values_skip_inference(self, notifier, spy_resolver, github_api, build):
        """Test no inference runs when every value is given."""
        request = _request(repo="org/app", sha="abc123", credentials_id="cred1")

        await notifier.notify(request, build)

        assert spy_resolver.method_calls == []

    @pytest.mark.asyncio
    async def test_canonical_sha_posted(self, notifier, github_api, build, full_sha):
        """Test the status goes to the full SHA even when the input is abbreviated."""
        request = _request(repo="org/app", sha="abc123", credentials_id="cred1")

        await notifier.notify(request, build)

        commit_url = github_api.get.call_args_list[2].args[0]
        status_url = github_api.post.call_args.args[0]
        assert commit_url.endswith("/commits/abc123")
        assert status_url.endswith(f"/statuses/{full_sha}")
        assert not status_url.endswith("/statuses/abc123")

    @pytest.mark.asyncio
    async def test_credentials_not_found_makes_no_call(self, notifier, mock_httpx, build):
        """Test unknown credentials fail with zero network calls."""
        from ghnotify.core.exceptions import CredentialsNotFoundError

        request = _request(repo="org/app", sha="abc123", credentials_id="unknown")

        with pytest.raises(CredentialsNotFoundError):
            await notifier.notify(request, build)

        mock_httpx.assert_not_called()

    @pytest.mark.asyncio
    async def test_infers_everything(self, notifier, spy_resolver, github_api, build, full_sha):
        """Test repo, credentials and sha all come from the build."""
        status = await notifier.notify(_request(), build)

        assert status.id == 1
        spy_resolver.infer_credentials_id.assert_called_once_with(build)
        spy_resolver.infer_repository.assert_called_once_with(build)
        spy_resolver.infer_commit_sha.assert_called_once_with(build)
        assert github_api.get.call_args_list[0].kwargs["headers"]["Authorization"] == "token ghp_token"

    @pytest.mark.asyncio
    async def test_inferred_repo(self, gateway, build):
        """Test an omitted repo resolves from the GitHub source."""
        from ghnotify.services.notifier import StatusNotifier

        gateway = MagicMock(wraps=gateway)
        gateway.open_repository = AsyncMock(side_effect=RuntimeError("stop"))
        notifier = StatusNotifier(gateway)

        with pytest.raises(RuntimeError):
            await notifier.notify(_request(credentials_id="cred1", sha="abc123"), build)

        args = gateway.open_repository.call_args.args
        assert args[0] == "cred1"
        assert args[1] == "org/app"

    @pytest.mark.asyncio
    async def test_inferred_pull_request_sha(self, notifier, github_api, make_build, api_response):
        """Test an omitted sha on a PR build uses the pull request hash."""
        from ghnotify.models.build import PullRequestRevision

        build = make_build(revision=PullRequestRevision(number=12, pull_hash="def456"))
        github_api.get.side_effect = [
            api_response(json={"login": "ci-bot"}),
            api_response(json=[{"full_name": "org/app", "name": "app"}], url=f"{API}/user/repos"),
            api_response(json={"sha": "def456" + "1" * 34}, url=f"{API}/repos/org/app/commits/def456"),
        ]

        await notifier.notify(_request(), build)

        assert github_api.get.call_args_list[2].args[0] == f"{API}/repos/org/app/commits/def456"

    @pytest.mark.asyncio
    async def test_explicit_target_url(self, notifier, github_api, build):
        """Test a given target URL replaces the build URL."""
        request = _request(target_url="https://dashboards.example.com/run/7")

        await notifier.notify(request, build)

        assert github_api.post.call_args.kwargs["json"]["target_url"] == "https://dashboards.example.com/run/7"

    @pytest.mark.asyncio
    async def test_custom_context_and_endpoint(self, notifier, github_api, build):
        """Test context label and Enterprise endpoint are honoured."""
        request = _request(context="ci/integration", git_api_url="https://ghe.example.com/api/v3")

        await notifier.notify(request, build)

        assert github_api.get.call_args_list[0].args[0] == "https://ghe.example.com/api/v3/user"
        assert github_api.post.call_args.kwargs["json"]["context"] == "ci/integration"

    @pytest.mark.asyncio
    async def test_commit_missing_posts_nothing(self, notifier, mock_httpx_client, api_response, build):
        """Test a missing commit aborts before delivery."""
        from ghnotify.core.exceptions import CommitNotFoundError

        mock_httpx_client.get.side_effect = [
            api_response(json={"login": "ci-bot"}),
            api_response(json=[{"full_name": "org/app"}], url=f"{API}/user/repos"),
            api_response(status_code=404, url=f"{API}/repos/org/app/commits/abc123"),
        ]

        with pytest.raises(CommitNotFoundError):
            await notifier.notify(_request(), build)

        mock_httpx_client.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_commit_fetch_failure_wrapped(self, gateway, build):
        """Test unexpected commit lookup failures surface as CommitNotFoundError."""
        from ghnotify.core.exceptions import CommitNotFoundError
        from ghnotify.services.github import GitHubSession, Repository
        from ghnotify.services.notifier import StatusNotifier

        gateway = MagicMock(wraps=gateway)
        gateway.open_repository = AsyncMock(
            return_value=(GitHubSession(api_url=API, token="t"), Repository("org/app", "app", "org"))
        )
        gateway.fetch_commit = AsyncMock(side_effect=KeyError("sha"))
        gateway.post_status = AsyncMock()

        with pytest.raises(CommitNotFoundError):
            await StatusNotifier(gateway).notify(_request(), build)

        gateway.post_status.assert_not_called()

    @pytest.mark.asyncio
    async def test_inference_failure_before_network(self, notifier, mock_httpx, make_build):
        """Test a build outside a GitHub project fails before any call."""
        from ghnotify.core.exceptions import CannotInferGitDataError

        with pytest.raises(CannotInferGitDataError):
            await notifier.notify(_request(), make_build(sources=[]))

        mock_httpx.assert_not_called()

    @pytest.mark.asyncio
    async def test_sha_inference_after_repository_check(self, notifier, mock_httpx_client, api_response, make_build):
        """Test repository errors win over a missing revision."""
        from ghnotify.core.exceptions import RepositoryNotFoundError

        mock_httpx_client.get.side_effect = [
            api_response(json={"login": "ci-bot"}),
            api_response(json=[], url=f"{API}/user/repos"),
        ]

        with pytest.raises(RepositoryNotFoundError):
            await notifier.notify(_request(), make_build(revision=None))

    @pytest.mark.asyncio
    async def test_delivery_error_propagates(self, notifier, github_api, api_response, build):
        """Test a rejected status surfaces as DeliveryError."""
        from ghnotify.core.exceptions import DeliveryError

        github_api.post.return_value = api_response(status_code=500, method="POST")

        with pytest.raises(DeliveryError):
            await notifier.notify(_request(), build)

        assert github_api.post.call_count == 1

    @pytest.mark.asyncio
    async def test_repeated_delivery_not_deduplicated(self, notifier, github_api, api_response, build, full_sha):
        """Test two identical notifications make two status calls."""
        first_round = list(github_api.get.side_effect)
        second_round = [
            api_response(json={"login": "ci-bot"}),
            api_response(json=[{"full_name": "org/app"}], url=f"{API}/user/repos"),
            api_response(json={"sha": full_sha}, url=f"{API}/repos/org/app/commits/abc123"),
        ]
        github_api.get.side_effect = first_round + second_round

        await notifier.notify(_request(), build)
        await notifier.notify(_request(), build)

        assert github_api.post.call_count == 2

    @pytest.mark.asyncio
    async def test_scope_defaults_to_job(self, build):
        """Test credentials are looked up in the scope of the build's job."""
        from ghnotify.core.exceptions import CredentialsNotFoundError
        from ghnotify.services.github import GitHubGateway
        from ghnotify.services.notifier import StatusNotifier

        store = MagicMock()
        store.lookup.return_value = None

        with pytest.raises(CredentialsNotFoundError):
            await StatusNotifier(GitHubGateway(store)).notify(_request(), build)

        store.lookup.assert_called_once_with("cred1", build.job)
