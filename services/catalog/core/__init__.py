"""
Core logic package.

Provides the error taxonomy, response envelopes, pagination and validation.
"""

from .exceptions import (
    AlreadyExistsError,
    BadRequestError,
    CatalogError,
    CreateClientError,
    InternalError,
    MissingUUIDError,
    NotFoundError,
    ServiceNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from .pagination import PageParams, parse_page_params

__all__ = [
    "AlreadyExistsError",
    "BadRequestError",
    "CatalogError",
    "CreateClientError",
    "InternalError",
    "MissingUUIDError",
    "NotFoundError",
    "ServiceNotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "PageParams",
    "parse_page_params",
]
