"""
Where: services/catalog/api/handler.py
What: The handler template shared by every route, plus body/path parsing.
Why: Each handler opens one span, records one metrics observation with the
     final status, and writes exactly one envelope.
"""

import functools
import logging
import time
import uuid
from typing import Callable, Type, TypeVar

import grpc
from fastapi import Request, status
from fastapi.responses import Response
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from services.common.core.metrics import observe_request
from services.common.core.trace import start_span

from ..core.exceptions import (
    INTERNAL_ERROR_MESSAGE,
    BadRequestError,
    CatalogError,
    public_error,
)
from ..core.responses import error_response, paginated_response, success_response
from ..models import Page

logger = logging.getLogger("catalog.handler")

M = TypeVar("M", bound=BaseModel)

_UINT64_MAX = 2**64 - 1


def instrumented(op: str, status_code: int = status.HTTP_200_OK) -> Callable:
    """
    Wrap an endpoint that returns a plain result.

    The result becomes a success envelope with `status_code` (paginated when it
    is a Page). CatalogError maps to its status; remote and unexpected errors
    become 500 with the generic message.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> Response:
            start = time.perf_counter()
            final_status = status_code
            with start_span(op) as span:
                try:
                    result = await func(*args, **kwargs)
                    if isinstance(result, Page):
                        return paginated_response(final_status, result)
                    return success_response(final_status, result)
                except CatalogError as exc:
                    err = public_error(exc)
                    final_status = err.status_code
                    logger.debug("request failed", extra={"op": op, "error": str(exc)})
                    return error_response(final_status, err.message)
                except grpc.RpcError as exc:
                    final_status = status.HTTP_500_INTERNAL_SERVER_ERROR
                    logger.debug("remote call failed", extra={"op": op, "error": str(exc)})
                    return error_response(final_status, INTERNAL_ERROR_MESSAGE)
                except Exception:
                    final_status = status.HTTP_500_INTERNAL_SERVER_ERROR
                    logger.error("unhandled error", exc_info=True, extra={"op": op})
                    return error_response(final_status, INTERNAL_ERROR_MESSAGE)
                finally:
                    span.set_attribute("http.status_code", final_status)
                    observe_request(time.perf_counter() - start, final_status, op)

        return wrapper

    return decorator


async def read_body(request: Request, model: Type[M]) -> M:
    """
    Decode the JSON body into `model`.

    Raises:
        BadRequestError: body is not valid JSON for the model
    """
    raw = await request.body()
    try:
        return model.model_validate_json(raw or b"{}")
    except PydanticValidationError as exc:
        logger.debug("failed to decode request", extra={"errors": exc.errors(include_url=False)})
        raise BadRequestError("failed to decode request") from exc


def parse_uuid(value: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except (ValueError, AttributeError, TypeError) as exc:
        raise BadRequestError("invalid uuid") from exc


def parse_order_id(value: str) -> int:
    """Decimal unsigned 64-bit integer."""
    if not value.isascii() or not value.isdigit():
        raise BadRequestError("invalid order id")
    order_id = int(value)
    if order_id > _UINT64_MAX:
        raise BadRequestError("invalid order id")
    return order_id
