"""
Response envelopes.

Success: {"data": ...}
Paginated success: {"data": [...], "count", "total_pages", "current_page", "has_next", "has_prev"}
Error: {"error": "..."}
"""

from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from ..models.pagination import Page


def success_response(status_code: int, data: Any) -> Response:
    # 204 must not carry a body.
    if status_code == status.HTTP_204_NO_CONTENT:
        return Response(status_code=status_code)
    return JSONResponse(status_code=status_code, content={"data": jsonable_encoder(data)})


def paginated_response(status_code: int, page: Page) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "data": jsonable_encoder(page.data),
            "count": page.count,
            "total_pages": page.total_pages,
            "current_page": page.current_page,
            "has_next": page.has_next_page,
            "has_prev": page.current_page > 1,
        },
    )


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})
