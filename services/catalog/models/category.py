"""
Category and filter-definition models.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .banner import Banner
from .seo import SEO


class Filter(BaseModel):
    id: Optional[int] = None
    name: str
    values: List[str] = Field(default_factory=list)
    filter_type: str = ""
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    category_slug: str = ""


class Category(BaseModel):
    """Categories are keyed by slug and may nest through `parent_slug`."""

    slug: str = ""
    title: str = ""
    product_quantity: int = 0
    src: str = ""
    alt: str = ""
    parent_slug: Optional[str] = None
    children: List["Category"] = Field(default_factory=list)
    seo: Optional[SEO] = None
    filters: List[Filter] = Field(default_factory=list)
    banner: Optional[Banner] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


Category.model_rebuild()
