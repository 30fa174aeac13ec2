"""
Services package.

Provides the controller contract and integrations with sibling services.
"""

from .banner import BannerClient
from .controller import CatalogController
from .discovery import DiscoveryClient
from .identity import IdentityClient
from .memory_catalog import InMemoryCatalog
from .seo import SEOClient

__all__ = [
    "BannerClient",
    "CatalogController",
    "DiscoveryClient",
    "IdentityClient",
    "InMemoryCatalog",
    "SEOClient",
]
