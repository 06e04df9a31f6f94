"""
Probe server setup.
"""

from aiohttp import web

from ghnotify.core.logging import get_logger
from ghnotify.services.github import GitHubGateway
from ghnotify.web.routes import (
    GATEWAY_KEY,
    handle_check_repo,
    handle_check_sha,
    handle_test_connection,
)

logger = get_logger(__name__)


def create_probe_app(gateway: GitHubGateway) -> web.Application:
    """Build the aiohttp application serving the validation probes."""
    app = web.Application()
    app[GATEWAY_KEY] = gateway
    app.router.add_get("/probes/test-connection", handle_test_connection)
    app.router.add_get("/probes/check-repo", handle_check_repo)
    app.router.add_get("/probes/check-sha", handle_check_sha)
    return app


async def start_probe_server(
    gateway: GitHubGateway,
    host: str = "0.0.0.0",
    port: int = 8081,
) -> web.AppRunner:
    """
    Start the probe server.

    Args:
        gateway: Gateway the probes validate against
        host: Host to bind to
        port: Port to bind to

    Returns:
        Runner, to be cleaned up on shutdown
    """
    runner = web.AppRunner(create_probe_app(gateway))
    await runner.setup()

    site = web.TCPSite(runner, host, port)
    await site.start()

    logger.info(f"Probe server started on {host}:{port}")
    return runner
