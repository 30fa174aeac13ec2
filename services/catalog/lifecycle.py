"""
Where: services/catalog/lifecycle.py
What: Catalog startup/shutdown orchestration for shared resources.
Why: Keep main.py focused on app assembly while preserving lifecycle behavior.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from services.common.core.http_client import HttpClientFactory
from services.common.core.metrics import start_metrics_server
from services.common.core.trace import setup_tracing

from .config import CatalogConfig
from .core.exceptions import RegistryError
from .services.banner import BannerClient
from .services.controller import CatalogController
from .services.discovery import DiscoveryClient
from .services.identity import IdentityClient
from .services.memory_catalog import InMemoryCatalog
from .services.seo import SEOClient

logger = logging.getLogger("catalog.main")


@asynccontextmanager
async def manage_lifespan(
    app: FastAPI,
    catalog_config: CatalogConfig,
    controller: Optional[CatalogController] = None,
) -> AsyncIterator[None]:
    """Manage application lifecycle."""
    factory = HttpClientFactory(catalog_config)
    client = factory.create_async_client(timeout=catalog_config.REGISTRY_TIMEOUT)
    tracer_provider = setup_tracing(
        catalog_config.SERVICE_NAME, catalog_config.OTEL_EXPORTER_OTLP_ENDPOINT
    )

    discovery = DiscoveryClient(
        client,
        catalog_config.REGISTRY_URL,
        catalog_config.SERVICE_NAME,
        catalog_config.advertised_address,
    )
    registered = False

    try:
        identity = IdentityClient(discovery, catalog_config.SSO_SERVICE_NAME)
        seo = SEOClient(discovery, catalog_config.SEO_SERVICE_NAME)
        banner = BannerClient(discovery, catalog_config.BANNER_SERVICE_NAME)
        if controller is None:
            controller = InMemoryCatalog(seo=seo, banner=banner)
            logger.info("No storage backend configured, using in-memory catalog")

        app.state.http_client = client
        app.state.discovery = discovery
        app.state.identity = identity
        app.state.seo = seo
        app.state.banner = banner
        app.state.controller = controller

        if catalog_config.METRICS_ENABLED:
            try:
                start_metrics_server(catalog_config.metrics_port)
            except OSError as exc:
                logger.warning(
                    "Failed to start metrics server on port %d: %s",
                    catalog_config.metrics_port,
                    exc,
                )

        if catalog_config.REGISTRY_ENABLED:
            try:
                await discovery.register()
                registered = True
            except RegistryError as exc:
                logger.warning("Service registration failed: %s", exc)

        logger.info(
            "Catalog initialized",
            extra={
                "service": catalog_config.SERVICE_NAME,
                "address": catalog_config.advertised_address,
            },
        )
        yield
    finally:
        if registered:
            try:
                await discovery.deregister()
            except RegistryError as exc:
                logger.warning("Service deregistration failed: %s", exc)

        logger.info("Catalog shutting down, closing http client.")
        tracer_provider.shutdown()
        await client.aclose()
