"""
Where: services/catalog/middleware.py
What: HTTP middleware for panic recovery, tracing and access logging.
Why: Isolate cross-cutting request concerns from app assembly.
"""

import logging
import time

from fastapi import Request, status
from opentelemetry.trace import SpanKind

from services.common.core.request_context import (
    clear_request_context,
    generate_request_id,
    set_deadline,
)
from services.common.core.trace import extract_context, start_span

from .config import config
from .core.exceptions import INTERNAL_ERROR_MESSAGE
from .core.responses import error_response

logger = logging.getLogger("catalog.main")


async def recover_panic_middleware(request: Request, call_next):
    """Turn any exception escaping the app into a 500 envelope."""
    try:
        return await call_next(request)
    except Exception:
        logger.error(
            "panic recovered",
            exc_info=True,
            extra={"method": request.method, "path": request.url.path},
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


async def tracing_middleware(request: Request, call_next):
    """Per-request server span, request id, deadline and structured access log."""
    start_time = time.perf_counter()
    parent = extract_context(request.headers)
    req_id = generate_request_id()
    set_deadline(config.WRITE_TIMEOUT)

    try:
        with start_span(f"HTTP {request.method}", context=parent, kind=SpanKind.SERVER) as span:
            span.set_attribute("http.method", request.method)
            span.set_attribute("http.target", request.url.path)

            response = await call_next(request)
            response.headers["X-Request-Id"] = req_id
            span.set_attribute("http.status_code", response.status_code)

            process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
            logger.info(
                f"{request.method} {request.url.path} {response.status_code}",
                extra={
                    "request_id": req_id,
                    "method": request.method,
                    "path": request.url.path,
                    "query_params": str(request.query_params),
                    "status": response.status_code,
                    "latency_ms": process_time_ms,
                    "user_agent": request.headers.get("user-agent"),
                    "client_ip": request.client.host if request.client else None,
                },
            )
            return response
    finally:
        clear_request_context()
