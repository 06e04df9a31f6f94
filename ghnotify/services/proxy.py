"""
Outbound proxy selection for GitHub traffic.
"""

from fnmatch import fnmatch

import httpx

from ghnotify.core.config import Settings


class ProxyConfiguration:
    """Process-wide proxy settings: one proxy URL plus no-proxy host globs."""

    def __init__(self, proxy_url: str | None = None, no_proxy_hosts: list[str] | None = None):
        self._proxy_url = proxy_url
        self._no_proxy_hosts = [p.lower() for p in (no_proxy_hosts or [])]

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProxyConfiguration":
        return cls(settings.proxy_url, settings.no_proxy_patterns)

    @staticmethod
    def _host(url_or_host: str) -> str:
        if "://" in url_or_host:
            return httpx.URL(url_or_host).host
        return url_or_host.split("/", 1)[0].split(":", 1)[0]

    def create_proxy(self, url_or_host: str) -> str | None:
        """
        Pick the proxy to reach a host.

        Args:
            url_or_host: API endpoint URL or bare hostname

        Returns:
            Proxy URL, or None to connect directly
        """
        if not self._proxy_url:
            return None
        host = self._host(url_or_host).lower()
        if any(fnmatch(host, pattern) for pattern in self._no_proxy_hosts):
            return None
        return self._proxy_url
