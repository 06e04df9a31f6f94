"""
Application factory and main entry point.
"""

import asyncio

from ghnotify.core.config import Settings, settings
from ghnotify.core.logging import setup_logging, get_logger
from ghnotify.services.credentials import (
    CredentialStore,
    InMemoryCredentialStore,
    JsonFileCredentialStore,
)
from ghnotify.services.github import GitHubGateway
from ghnotify.services.notifier import StatusNotifier
from ghnotify.services.proxy import ProxyConfiguration
from ghnotify.web.server import start_probe_server

logger = get_logger(__name__)


def create_credential_store(config: Settings = settings) -> CredentialStore:
    """Load the configured credential store, or an empty one."""
    if config.credentials_file:
        return JsonFileCredentialStore(config.credentials_file)
    logger.warning("CREDENTIALS_FILE not set, every credentialsId will be reported as not found")
    return InMemoryCredentialStore()


def create_gateway(
    credential_store: CredentialStore | None = None,
    config: Settings = settings,
) -> GitHubGateway:
    """Create a GitHub gateway wired to the configured proxy and endpoint."""
    return GitHubGateway(
        credential_store if credential_store is not None else create_credential_store(config),
        proxy_config=ProxyConfiguration.from_settings(config),
        api_url=config.github_api_url,
        timeout=config.github_timeout,
    )


def create_notifier(
    credential_store: CredentialStore | None = None,
    config: Settings = settings,
) -> StatusNotifier:
    """Create the notifier an engine hands to ``GitHubNotifyStep.run``."""
    return StatusNotifier(create_gateway(credential_store, config))


async def main() -> None:
    """Main application entry point: serve the validation probes."""
    setup_logging(settings.log_level)
    logger.info("Starting probe server...")

    gateway = create_gateway()
    runner = await start_probe_server(gateway, settings.probe_host, settings.probe_port)

    # Keep running until cancelled
    stop_signal = asyncio.Event()
    try:
        await stop_signal.wait()
    except asyncio.CancelledError:
        pass
    finally:
        await runner.cleanup()
