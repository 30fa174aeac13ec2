"""
Where: services/common/core/http_client.py
What: Factory for outbound httpx clients (registry calls and similar).
Why: TLS verification, pool sizing and proxy handling are decided once, from
     config, instead of at every call site.
"""

import logging
from typing import Optional

import httpx

from .config import BaseAppConfig

logger = logging.getLogger(__name__)


class HttpClientFactory:
    def __init__(self, config: BaseAppConfig):
        self.config = config

    def default_limits(self) -> httpx.Limits:
        return httpx.Limits(
            max_keepalive_connections=self.config.HTTP_MAX_KEEPALIVE,
            max_connections=self.config.HTTP_MAX_CONNECTIONS,
        )

    def create_async_client(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        **kwargs,
    ) -> httpx.AsyncClient:
        """
        Create an httpx.AsyncClient for internal calls.

        Args:
            base_url: Resolved against every relative request path
            timeout: Per-request timeout in seconds (httpx default when None)
            **kwargs: Passed to httpx.AsyncClient; explicit `verify` / `limits` win
        """
        kwargs.setdefault("verify", self.config.VERIFY_SSL)
        kwargs.setdefault("limits", self.default_limits())
        # Internal calls never go through the host's HTTP(S)_PROXY settings.
        kwargs.setdefault("trust_env", False)
        if base_url:
            kwargs["base_url"] = base_url
        if timeout is not None:
            kwargs["timeout"] = timeout

        if not kwargs["verify"]:
            logger.debug("Creating HTTP client without certificate verification")
        return httpx.AsyncClient(**kwargs)
