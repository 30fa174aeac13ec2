"""
Catalog configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys
from pydantic import Field
from services.common.core.config import BaseAppConfig


class CatalogConfig(BaseAppConfig):
    """
    Configuration management for the product-catalog service.
    """

    # Service identity
    SERVICE_NAME: str = Field(default="products", description="Logical name in the registry")
    SERVICE_SCHEME: str = Field(default="http", description="Scheme of the advertised address")
    SERVICE_DOMAIN: str = Field(default="localhost", description="Host of the advertised address")
    SERVICE_ADDRESS: str = Field(
        default="", description="Explicit advertised address (overrides scheme/domain/port)"
    )

    # Server settings
    BIND_HOST: str = Field(default="0.0.0.0", description="Listen host")
    PORT: int = Field(default=8000, gt=0, lt=65536, description="Listen port")
    READ_TIMEOUT: float = Field(default=15.0, gt=0, description="Request read timeout (seconds)")
    WRITE_TIMEOUT: float = Field(default=15.0, gt=0, description="Request deadline (seconds)")
    IDLE_TIMEOUT: float = Field(default=60.0, gt=0, description="Keep-alive timeout (seconds)")
    root_path: str = Field(default="", description="API root path (for proxy)")

    # Service registry
    REGISTRY_URL: str = Field(default="http://localhost:50030", description="Registry base URL")
    REGISTRY_ENABLED: bool = Field(default=True, description="Register/deregister at startup")
    REGISTRY_TIMEOUT: float = Field(default=5.0, gt=0, description="Registry call timeout")

    # Sibling services (logical names resolved through the registry)
    SSO_SERVICE_NAME: str = Field(default="sso", description="Identity service name")
    SEO_SERVICE_NAME: str = Field(default="seo", description="SEO service name")
    BANNER_SERVICE_NAME: str = Field(default="etc", description="Banner service name")

    # Pagination
    DEFAULT_PAGE_SIZE: int = Field(default=40, ge=1, description="Page size for list handlers")
    SEARCH_PAGE_SIZE: int = Field(default=10, ge=1, description="Page size for search handlers")
    MIN_SEARCH_QUERY_LENGTH: int = Field(default=3, ge=0, description="Shortest searchable query")

    # Metrics (0 means PORT + 5)
    METRICS_PORT: int = Field(default=0, ge=0, lt=65536, description="Prometheus exporter port")

    @property
    def advertised_address(self) -> str:
        if self.SERVICE_ADDRESS:
            return self.SERVICE_ADDRESS
        return f"{self.SERVICE_SCHEME}://{self.SERVICE_DOMAIN}:{self.PORT}"

    @property
    def metrics_port(self) -> int:
        return self.METRICS_PORT or self.PORT + 5


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = CatalogConfig()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
