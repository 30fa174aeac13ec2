"""
Item (product) domain models.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .seo import SEO


class ItemAttribute(BaseModel):
    id: Optional[int] = None
    name: str
    value: str
    item_id: Optional[uuid.UUID] = None


class ItemMedia(BaseModel):
    id: Optional[int] = None
    src: str
    alt: str = ""
    item_id: Optional[uuid.UUID] = None


class RelatedProduct(BaseModel):
    item_id: Optional[uuid.UUID] = None
    related_item_id: uuid.UUID
    related_item: Optional["Item"] = None


class Item(BaseModel):
    """
    A product. `categories` holds category slugs; labels are `is_hit` / `is_rec`.
    """

    id: uuid.UUID = Field(default_factory=lambda: uuid.UUID(int=0))
    title: str = ""
    description: str = ""
    price: float = 0.0
    quantity_in_stock: int = 0
    in_stock: bool = False
    src: str = ""
    alt: str = ""
    is_hit: bool = False
    is_rec: bool = False
    article: str = ""
    categories: List[str] = Field(default_factory=list)
    parent_item_id: Optional[uuid.UUID] = None
    seo: Optional[SEO] = None
    media: List[ItemMedia] = Field(default_factory=list)
    attributes: List[ItemAttribute] = Field(default_factory=list)
    variants: List["Item"] = Field(default_factory=list)
    related_products: List[RelatedProduct] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


RelatedProduct.model_rebuild()
Item.model_rebuild()
