"""
Promotion models. A promotion is keyed by slug and discounts a set of items.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .banner import Banner
from .item import Item
from .seo import SEO


class PromotionItem(BaseModel):
    id: Optional[int] = None
    discount: int = 0
    promotion_slug: str = ""
    item_id: uuid.UUID
    item: Optional[Item] = None


class Promotion(BaseModel):
    slug: str = ""
    title: str = ""
    description: str = ""
    src: str = ""
    alt: str = ""
    lasts_to: Optional[datetime] = None
    promotion_items: List[PromotionItem] = Field(default_factory=list)
    banner: Optional[Banner] = None
    seo: Optional[SEO] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
