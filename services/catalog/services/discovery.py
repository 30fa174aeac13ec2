"""
Where: services/catalog/services/discovery.py
What: HTTP client for the service registry (register, deregister, find).
Why: Sibling services are addressed by logical name; every outbound call
     resolves the current address first.
"""

import logging

import httpx

from services.common.core.trace import start_span

from ..core.exceptions import RegistryError, ServiceNotFoundError

logger = logging.getLogger("catalog.discovery")


class DiscoveryClient:
    """
    Stateless registry client.

    Every call is a fresh request: no caching, no retry. Safe to share across
    concurrent requests.
    """

    def __init__(self, client: httpx.AsyncClient, registry_url: str, name: str, address: str):
        self.client = client
        self.registry_url = registry_url.rstrip("/")
        self.name = name
        self.address = address

    def _url(self, path: str) -> str:
        return f"{self.registry_url}{path}"

    async def register(self) -> None:
        """Announce this service. Expects 201 from the registry."""
        await self._announce("/register", httpx.codes.CREATED)
        logger.info("Registered %s at %s", self.name, self.address)

    async def deregister(self) -> None:
        """Withdraw this service. Expects 200 from the registry."""
        await self._announce("/deregister", httpx.codes.OK)
        logger.info("Deregistered %s", self.name)

    async def _announce(self, path: str, expected: int) -> None:
        body = {"name": self.name, "address": self.address}
        try:
            response = await self.client.post(self._url(path), json=body)
        except httpx.HTTPError as exc:
            raise RegistryError(f"registry call {path} failed: {exc}") from exc

        if response.status_code != expected:
            raise RegistryError(
                f"registry call {path} returned {response.status_code}, expected {expected}"
            )

    async def find_service(self, name: str) -> str:
        """
        Resolve a logical service name to its address.

        Raises:
            ServiceNotFoundError: non-200 response, malformed body or network failure
        """
        with start_span("discovery.FindServiceByName.client") as span:
            span.set_attribute("service.lookup", name)
            try:
                response = await self.client.post(self._url("/find"), json={"name": name})
            except httpx.HTTPError as exc:
                logger.debug("Registry lookup failed for %s: %s", name, exc)
                raise ServiceNotFoundError(name) from exc

            if response.status_code != httpx.codes.OK:
                logger.debug(
                    "Registry lookup for %s returned %s", name, response.status_code
                )
                raise ServiceNotFoundError(name)

            try:
                address = response.json()["address"]
            except (ValueError, KeyError, TypeError) as exc:
                raise ServiceNotFoundError(name) from exc

            if not isinstance(address, str) or not address:
                raise ServiceNotFoundError(name)
            return address
