"""
Data model definitions package.

Aggregates Pydantic models for use in other modules.
"""

from .banner import Banner, BannerSlide
from .category import Category, Filter
from .favorite import Favorite
from .item import Item, ItemAttribute, ItemMedia, RelatedProduct
from .order import Order, OrderItem, OrderStatus
from .pagination import Page
from .promotion import Promotion, PromotionItem
from .seo import SEO

__all__ = [
    "Banner",
    "BannerSlide",
    "Category",
    "Filter",
    "Favorite",
    "Item",
    "ItemAttribute",
    "ItemMedia",
    "RelatedProduct",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Page",
    "Promotion",
    "PromotionItem",
    "SEO",
]
