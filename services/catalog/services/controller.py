"""
Where: services/catalog/services/controller.py
What: The controller contract the HTTP handlers depend on.
Why: Storage is an external collaborator; handlers only see this interface.

Controllers raise NotFoundError / AlreadyExistsError for the conditions the
handlers translate to 404 / 409. Anything else is an internal error.
"""

import uuid
from typing import Dict, List, Protocol

from ..models import (
    Category,
    Favorite,
    Filter,
    Item,
    Order,
    Page,
    Promotion,
    RelatedProduct,
)


class CatalogController(Protocol):
    # ===== Favorites =====
    async def list_favorites(self, uid: uuid.UUID) -> List[Favorite]: ...

    async def add_to_favorites(self, uid: uuid.UUID, item_id: uuid.UUID) -> Favorite: ...

    async def remove_from_favorites(self, uid: uuid.UUID, item_id: uuid.UUID) -> None: ...

    # ===== Items =====
    async def list_items(self, page: int, size: int) -> Page: ...

    async def list_items_by_label(self, label: str, page: int, size: int) -> Page: ...

    async def list_category_items(
        self, slug: str, page: int, size: int, filters: Dict[str, str], sort: str
    ) -> Page: ...

    async def list_related_items(self, uid: uuid.UUID) -> List[RelatedProduct]: ...

    async def item_search(self, query: str, page: int, size: int) -> Page: ...

    async def item_attr_search(self, query: str, page: int, size: int) -> Page: ...

    async def get_item(self, uid: uuid.UUID) -> Item: ...

    async def create_item(self, item: Item) -> Item: ...

    async def update_item(self, uid: uuid.UUID, item: Item) -> Item: ...

    async def delete_item(self, uid: uuid.UUID) -> None: ...

    # ===== Categories =====
    async def list_categories(self, page: int, size: int) -> Page: ...

    async def category_search(self, query: str, page: int, size: int) -> Page: ...

    async def category_filters_search(self, query: str, page: int, size: int) -> Page: ...

    async def list_category_filters(self, slug: str) -> List[Filter]: ...

    async def get_category(self, slug: str) -> Category: ...

    async def create_category(self, category: Category) -> str: ...

    async def update_category(self, slug: str, category: Category) -> None: ...

    async def delete_category(self, slug: str) -> None: ...

    # ===== Promotions =====
    async def list_promotions(self, page: int, size: int) -> Page: ...

    async def promotion_search(self, query: str, page: int, size: int) -> Page: ...

    async def list_promotion_items(self, slug: str, page: int, size: int) -> Page: ...

    async def get_promotion(self, slug: str) -> Promotion: ...

    async def create_promotion(self, promotion: Promotion) -> Promotion: ...

    async def update_promotion(self, slug: str, promotion: Promotion) -> Promotion: ...

    async def delete_promotion(self, slug: str) -> None: ...

    # ===== Orders =====
    async def list_orders(
        self, page: int, size: int, filters: Dict[str, str], sort: str
    ) -> Page: ...

    async def list_user_orders(self, uid: uuid.UUID, page: int, size: int) -> Page: ...

    async def get_order(self, order_id: int) -> Order: ...

    async def create_order(self, uid: uuid.UUID, order: Order) -> int: ...

    async def update_order(self, order_id: int, order: Order) -> None: ...

    async def cancel_order(self, order_id: int) -> None: ...
