"""
Dependency Injection for the catalog API.

Manage request handler dependencies using FastAPI Depends.
"""

import logging
import uuid
from typing import Annotated, Any

import grpc
from fastapi import Depends, Request

from services.common.core.request_context import set_uid

from ..core.exceptions import CatalogError, UnauthorizedError
from ..services.controller import CatalogController
from ..services.identity import IdentityClient

logger = logging.getLogger("catalog.auth")

BEARER_PREFIX = "Bearer "


# ==========================================
# 1. Service Accessors
# ==========================================


def get_controller(request: Request) -> CatalogController:
    return request.app.state.controller


def get_identity(request: Request) -> IdentityClient:
    return request.app.state.identity


# Service Dependency Type Aliases
ControllerDep = Annotated[CatalogController, Depends(get_controller)]
IdentityDep = Annotated[IdentityClient, Depends(get_identity)]


# ==========================================
# 2. Authentication
# ==========================================


def bearer_token(request: Request) -> str:
    """
    Extract the bearer token from the Authorization header.

    Raises:
        UnauthorizedError: header missing or not a Bearer credential
    """
    authorization = request.headers.get("Authorization")
    if not authorization:
        raise UnauthorizedError("authorization header is missing")
    if not authorization.startswith(BEARER_PREFIX):
        raise UnauthorizedError("invalid token format")
    return authorization[len(BEARER_PREFIX) :]


def parse_caller(uid: Any) -> uuid.UUID:
    """
    The authenticated caller id must be a UUID.

    Raises:
        UnauthorizedError: empty or malformed id
    """
    try:
        return uuid.UUID(str(uid))
    except ValueError as exc:
        raise UnauthorizedError("invalid uid") from exc


async def require_auth(request: Request, identity: IdentityDep) -> uuid.UUID:
    """
    Resolve the caller of a protected route and store it in the request context.

    Returns:
        The caller id

    Raises:
        UnauthorizedError: 401 on any authentication failure, including an
            identity service answer that is not a UUID
    """
    token = bearer_token(request)

    try:
        uid = await identity.parse_claims(token)
    except CatalogError as exc:
        logger.debug("authentication failed: %s", exc.message)
        raise UnauthorizedError(exc.message) from exc
    except grpc.RpcError as exc:
        details = exc.details() if callable(getattr(exc, "details", None)) else None
        logger.debug("identity service rejected token: %s", details)
        raise UnauthorizedError(details or "invalid token") from exc

    caller = parse_caller(uid)
    set_uid(str(caller))
    return caller


# Logic Dependency Type Aliases
UidDep = Annotated[uuid.UUID, Depends(require_auth)]
