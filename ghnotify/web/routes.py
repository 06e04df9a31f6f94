"""
HTTP routes exposing the validation probes to a configuration UI.
"""

from aiohttp import web

from ghnotify.core.logging import get_logger
from ghnotify.handlers import probes
from ghnotify.services.github import GitHubGateway

logger = get_logger(__name__)

GATEWAY_KEY = web.AppKey("gateway", GitHubGateway)


def _query(request: web.Request, name: str) -> str | None:
    value = request.query.get(name, "").strip()
    return value or None


async def handle_test_connection(request: web.Request) -> web.Response:
    """GET /probes/test-connection?credentialsId=&gitApiUrl="""
    result = await probes.test_connection(
        request.app[GATEWAY_KEY],
        _query(request, "credentialsId"),
        _query(request, "gitApiUrl"),
        _query(request, "item"),
    )
    return web.json_response(result.to_dict())


async def handle_check_repo(request: web.Request) -> web.Response:
    """GET /probes/check-repo?credentialsId=&repo=&gitApiUrl="""
    result = await probes.check_repo(
        request.app[GATEWAY_KEY],
        _query(request, "credentialsId"),
        _query(request, "repo"),
        _query(request, "gitApiUrl"),
        _query(request, "item"),
    )
    return web.json_response(result.to_dict())


async def handle_check_sha(request: web.Request) -> web.Response:
    """GET /probes/check-sha?credentialsId=&repo=&sha=&gitApiUrl="""
    result = await probes.check_sha(
        request.app[GATEWAY_KEY],
        _query(request, "credentialsId"),
        _query(request, "repo"),
        _query(request, "sha"),
        _query(request, "gitApiUrl"),
        _query(request, "item"),
    )
    return web.json_response(result.to_dict())
