"""
Where: services/catalog/core/pagination.py
What: Query-string parsing for page, size, sort, search query and filters.
Why: Every list/search handler must hand the controller a window with
     page >= 1 and size >= 1, falling back to defaults silently.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from starlette.datastructures import QueryParams

RESERVED_PARAMS = frozenset({"page", "size", "sort", "q"})


@dataclass(frozen=True)
class PageParams:
    page: int
    size: int
    sort: str = ""
    query: str = ""
    filters: Dict[str, str] = field(default_factory=dict)


def parse_positive_int(value: Optional[str], default: int) -> int:
    """Parse a strictly positive integer; anything else yields `default`."""
    if value is None:
        return default
    try:
        parsed = int(value.strip())
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 1 else default


def _first(params: QueryParams, key: str) -> Optional[str]:
    values = params.getlist(key)
    return values[0] if values else None


def parse_filters(params: QueryParams) -> Dict[str, str]:
    """
    Every non-reserved query parameter, first value wins.

    Unknown keys are kept verbatim; the storage layer decides what they mean.
    """
    filters: Dict[str, str] = {}
    for key in params.keys():
        if key in RESERVED_PARAMS or key in filters:
            continue
        filters[key] = _first(params, key)
    return filters


def parse_page_params(params: Mapping, default_size: int) -> PageParams:
    if not isinstance(params, QueryParams):
        params = QueryParams(params)
    return PageParams(
        page=parse_positive_int(_first(params, "page"), 1),
        size=parse_positive_int(_first(params, "size"), default_size),
        sort=_first(params, "sort") or "",
        query=_first(params, "q") or "",
        filters=parse_filters(params),
    )


def is_searchable(query: str, min_length: int) -> bool:
    """True when the search query is long enough (counted in code points)."""
    return len(query) >= min_length
