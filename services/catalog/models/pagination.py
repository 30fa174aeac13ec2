"""
Paginated result returned by the controller.
"""

import math
from typing import Any, Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a listing plus the totals needed to navigate it."""

    data: List[T] = Field(default_factory=list)
    count: int = 0
    total_pages: int = 0
    current_page: int = 1
    has_next_page: bool = False

    @classmethod
    def build(cls, data: List[Any], count: int, page: int, size: int) -> "Page":
        total_pages = math.ceil(count / size) if size else 0
        return cls(
            data=data,
            count=count,
            total_pages=total_pages,
            current_page=page,
            has_next_page=page < total_pages,
        )
