"""
Custom exception classes and FastAPI exception handlers.

Every failure the catalog surfaces maps to one HTTP status and one
`{"error": message}` body.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .responses import error_response

logger = logging.getLogger("catalog.errors")

INTERNAL_ERROR_MESSAGE = "internal server error"


class CatalogError(Exception):
    """Base exception; carries the client-facing message and status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "not found"


class AlreadyExistsError(CatalogError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "already exists"


class BadRequestError(CatalogError):
    """Malformed body or path identifier."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "bad request"


class ValidationError(BadRequestError):
    """Input violates a field rule; the message names the field."""


class MissingUUIDError(BadRequestError):
    default_message = "missing uuid"


class UnauthorizedError(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "unauthorized"


class MethodNotAllowedError(CatalogError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    default_message = "method not allowed"


class InternalError(CatalogError):
    pass


# ===========================================
# Remote collaborator failures
# ===========================================


class RemoteServiceError(CatalogError):
    """Base for failures reaching a sibling service. Surfaced as a generic 500."""


class ServiceNotFoundError(RemoteServiceError):
    """The registry could not resolve a logical service name."""

    default_message = "service not found"

    def __init__(self, service_name: str = "", message: str = None):
        self.service_name = service_name
        super().__init__(message)


class CreateClientError(RemoteServiceError):
    """Opening a transport to a resolved address failed."""

    default_message = "failed to create client"

    def __init__(self, address: str = "", cause: Exception = None):
        self.address = address
        self.cause = cause
        super().__init__()


class RegistryError(Exception):
    """Registering or deregistering this service with the registry failed."""


def public_error(exc: Exception) -> CatalogError:
    """
    Translate any exception into the error the client may see.

    Remote failures and unknown exceptions collapse into InternalError so raw
    remote messages never reach the response body.
    """
    if isinstance(exc, RemoteServiceError) or not isinstance(exc, CatalogError):
        return InternalError()
    return exc


# ===========================================
# Exception Handlers
# ===========================================


async def catalog_exception_handler(request: Request, exc: CatalogError):
    err = public_error(exc)
    return error_response(err.status_code, err.message)


async def global_exception_handler(request: Request, exc: Exception):
    """
    Catch-all handler for unhandled exceptions.
    """
    logger.error(
        "Unhandled exception: %s",
        exc,
        exc_info=True,
        extra={"path": request.url.path, "method": request.method},
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Router-level errors (unknown path, method not in the route's allow-set).
    """
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return error_response(exc.status_code, MethodNotAllowedError.default_message)
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(exc.status_code, NotFoundError.default_message)
    return error_response(exc.status_code, str(exc.detail).lower())


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Path/query coercion failures are client errors.
    """
    logger.debug("Request validation failed: %s", exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "invalid request parameters"},
    )
