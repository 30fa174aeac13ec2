"""
Where: services/catalog/services/memory_catalog.py
What: Dict-backed CatalogController used when no storage backend is wired.
Why: Lets the service run end to end (and be tested) without a database,
     while keeping the same side effects on the SEO and banner services.
"""

import itertools
import logging
import uuid
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, Tuple

from ..core.exceptions import AlreadyExistsError, NotFoundError
from ..core.slug import slugify
from ..models import (
    SEO,
    Banner,
    Category,
    Favorite,
    Filter,
    Item,
    Order,
    OrderStatus,
    Page,
    Promotion,
    RelatedProduct,
)
from .banner import BANNER_CATEGORY, BANNER_PROMO, BannerClient
from .seo import SEO_CATEGORY, SEO_ITEM, SEO_PROMO, SEOClient

logger = logging.getLogger("catalog.controller")

_PRICE_FILTERS = {"min_price", "max_price"}
_TRUTHY = {"1", "true", "yes", "on"}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _contains(query: str, *fields: str) -> bool:
    needle = query.casefold()
    return any(needle in (value or "").casefold() for value in fields)


def _paginate(rows: List, page: int, size: int) -> Page:
    start = (page - 1) * size
    return Page.build(rows[start : start + size], len(rows), page, size)


def _sort(rows: List, sort: str, keys: Dict[str, Callable]) -> List:
    """Sort by `field` or `-field`; unknown fields leave the order untouched."""
    if not sort:
        return rows
    reverse = sort.startswith("-")
    key = keys.get(sort.lstrip("-+"))
    if key is None:
        return rows
    return sorted(rows, key=key, reverse=reverse)


def _item_matches(item: Item, filters: Dict[str, str]) -> bool:
    for name, raw in filters.items():
        if name in _PRICE_FILTERS:
            try:
                bound = float(raw)
            except ValueError:
                continue
            if name == "min_price" and item.price < bound:
                return False
            if name == "max_price" and item.price > bound:
                return False
        elif name == "in_stock":
            if item.in_stock != (raw.strip().lower() in _TRUTHY):
                return False
        else:
            accepted = {v.strip().casefold() for v in raw.split(",") if v.strip()}
            values = {
                attr.value.casefold()
                for attr in item.attributes
                if attr.name.casefold() == name.casefold()
            }
            if accepted and not values & accepted:
                return False
    return True


_ITEM_SORT_KEYS: Dict[str, Callable] = {
    "price": lambda i: i.price,
    "title": lambda i: i.title.casefold(),
    "created_at": lambda i: i.created_at or datetime.min.replace(tzinfo=timezone.utc),
}
_ORDER_SORT_KEYS: Dict[str, Callable] = {
    "id": lambda o: o.id,
    "total_amount": lambda o: o.total_amount,
    "created_at": lambda o: o.created_at or datetime.min.replace(tzinfo=timezone.utc),
    "status": lambda o: o.status.value,
}


class InMemoryCatalog:
    """
    CatalogController over process-local dicts.

    Mutations fan out to the SEO service (items, categories, promotions) and
    the banner service (categories, promotions). Create-time SEO failures are
    returned to the caller; every other side-effect failure is logged only.
    """

    def __init__(self, seo: Optional[SEOClient] = None, banner: Optional[BannerClient] = None):
        self.seo = seo
        self.banner = banner
        self._items: Dict[uuid.UUID, Item] = {}
        self._categories: Dict[str, Category] = {}
        self._promotions: Dict[str, Promotion] = {}
        self._favorites: Dict[Tuple[uuid.UUID, uuid.UUID], Favorite] = {}
        self._orders: Dict[int, Order] = {}
        self._favorite_ids = itertools.count(1)
        self._order_ids = itertools.count(1)

    async def _side_effect(
        self, op: str, what: str, call: Awaitable, propagate: bool = False
    ) -> None:
        try:
            await call
        except Exception as exc:
            logger.debug("failed to %s", what, extra={"op": op, "error": str(exc)})
            if propagate:
                raise

    # ===== Favorites =====

    async def list_favorites(self, uid: uuid.UUID) -> List[Favorite]:
        favorites = [f for (owner, _), f in self._favorites.items() if owner == uid]
        return [
            f.model_copy(update={"item": self._items.get(f.item_id)}, deep=True)
            for f in favorites
        ]

    async def add_to_favorites(self, uid: uuid.UUID, item_id: uuid.UUID) -> Favorite:
        if item_id not in self._items:
            raise NotFoundError()
        if (uid, item_id) in self._favorites:
            raise AlreadyExistsError()
        favorite = Favorite(id=next(self._favorite_ids), user_id=uid, item_id=item_id)
        self._favorites[(uid, item_id)] = favorite
        return favorite.model_copy(update={"item": self._items[item_id]}, deep=True)

    async def remove_from_favorites(self, uid: uuid.UUID, item_id: uuid.UUID) -> None:
        if self._favorites.pop((uid, item_id), None) is None:
            raise NotFoundError()

    # ===== Items =====

    def _all_items(self) -> List[Item]:
        return sorted(self._items.values(), key=_ITEM_SORT_KEYS["created_at"], reverse=True)

    async def list_items(self, page: int, size: int) -> Page:
        return _paginate(self._all_items(), page, size)

    async def list_items_by_label(self, label: str, page: int, size: int) -> Page:
        if label == "hit":
            rows = [i for i in self._all_items() if i.is_hit]
        elif label == "rec":
            rows = [i for i in self._all_items() if i.is_rec]
        else:
            rows = []
        return _paginate(rows, page, size)

    async def list_category_items(
        self, slug: str, page: int, size: int, filters: Dict[str, str], sort: str
    ) -> Page:
        rows = [
            i
            for i in self._all_items()
            if slug in i.categories and _item_matches(i, filters)
        ]
        return _paginate(_sort(rows, sort, _ITEM_SORT_KEYS), page, size)

    async def list_related_items(self, uid: uuid.UUID) -> List[RelatedProduct]:
        item = self._items.get(uid)
        if item is None:
            raise NotFoundError()
        return [
            RelatedProduct(
                item_id=uid,
                related_item_id=rel.related_item_id,
                related_item=self._items.get(rel.related_item_id),
            )
            for rel in item.related_products
        ]

    async def item_search(self, query: str, page: int, size: int) -> Page:
        rows = [i for i in self._all_items() if _contains(query, i.title, i.article, i.description)]
        return _paginate(rows, page, size)

    async def item_attr_search(self, query: str, page: int, size: int) -> Page:
        rows = [
            i
            for i in self._all_items()
            if any(_contains(query, a.name, a.value) for a in i.attributes)
        ]
        return _paginate(rows, page, size)

    async def get_item(self, uid: uuid.UUID) -> Item:
        item = self._items.get(uid)
        if item is None:
            raise NotFoundError()
        return item.model_copy(deep=True)

    async def create_item(self, item: Item) -> Item:
        op = "items.CreateItem.ctrl"
        now = _now()
        created = item.model_copy(
            update={"id": uuid.uuid4(), "created_at": now, "updated_at": now}, deep=True
        )
        self._items[created.id] = created

        if self.seo:
            await self._side_effect(
                op,
                "create item SEO",
                self.seo.create(SEO_ITEM, str(created.id), item.seo or SEO()),
                propagate=True,
            )
        return created.model_copy(deep=True)

    async def update_item(self, uid: uuid.UUID, item: Item) -> Item:
        op = "items.UpdateItem.ctrl"
        current = self._items.get(uid)
        if current is None:
            raise NotFoundError()
        updated = item.model_copy(
            update={"id": uid, "created_at": current.created_at, "updated_at": _now()}, deep=True
        )
        self._items[uid] = updated

        if self.seo:
            await self._side_effect(
                op, "update item SEO", self.seo.update(SEO_ITEM, str(uid), item.seo or SEO())
            )
        return updated.model_copy(deep=True)

    async def delete_item(self, uid: uuid.UUID) -> None:
        op = "items.DeleteItem.ctrl"
        if self._items.pop(uid, None) is None:
            raise NotFoundError()
        for key in [k for k in self._favorites if k[1] == uid]:
            del self._favorites[key]

        if self.seo:
            await self._side_effect(op, "delete item SEO", self.seo.delete(SEO_ITEM, str(uid)))

    # ===== Categories =====

    def _hydrate_category(self, category: Category) -> Category:
        children = [
            c.model_copy(deep=True)
            for c in self._categories.values()
            if c.parent_slug == category.slug
        ]
        quantity = sum(1 for i in self._items.values() if category.slug in i.categories)
        return category.model_copy(
            update={"children": children, "product_quantity": quantity}, deep=True
        )

    async def list_categories(self, page: int, size: int) -> Page:
        rows = [self._hydrate_category(c) for c in self._categories.values()]
        return _paginate(rows, page, size)

    async def category_search(self, query: str, page: int, size: int) -> Page:
        rows = [
            self._hydrate_category(c)
            for c in self._categories.values()
            if _contains(query, c.title, c.slug)
        ]
        return _paginate(rows, page, size)

    def _all_filters(self) -> Iterable[Filter]:
        for category in self._categories.values():
            yield from category.filters

    async def category_filters_search(self, query: str, page: int, size: int) -> Page:
        rows = [f for f in self._all_filters() if _contains(query, f.name, *f.values)]
        return _paginate(rows, page, size)

    async def list_category_filters(self, slug: str) -> List[Filter]:
        category = self._categories.get(slug)
        if category is None:
            raise NotFoundError()
        return [f.model_copy(deep=True) for f in category.filters]

    async def get_category(self, slug: str) -> Category:
        category = self._categories.get(slug)
        if category is None:
            raise NotFoundError()
        return self._hydrate_category(category)

    async def create_category(self, category: Category) -> str:
        op = "category.CreateCategory.ctrl"
        slug = slugify(category.title) or uuid.uuid4().hex[:12]
        if slug in self._categories:
            raise AlreadyExistsError()
        now = _now()
        stored = category.model_copy(
            update={
                "slug": slug,
                "children": [],
                "filters": [
                    f.model_copy(update={"category_slug": slug}) for f in category.filters
                ],
                "created_at": now,
                "updated_at": now,
            },
            deep=True,
        )
        self._categories[slug] = stored

        if self.banner:
            await self._side_effect(
                op,
                "create category banner",
                self.banner.create(BANNER_CATEGORY, slug, category.banner or Banner()),
            )
        if self.seo:
            await self._side_effect(
                op,
                "create category SEO",
                self.seo.create(SEO_CATEGORY, slug, category.seo or SEO()),
                propagate=True,
            )
        return slug

    async def update_category(self, slug: str, category: Category) -> None:
        op = "category.UpdateCategory.ctrl"
        current = self._categories.get(slug)
        if current is None:
            raise NotFoundError()
        self._categories[slug] = category.model_copy(
            update={
                "slug": slug,
                "children": [],
                "filters": [
                    f.model_copy(update={"category_slug": slug}) for f in category.filters
                ],
                "created_at": current.created_at,
                "updated_at": _now(),
            },
            deep=True,
        )

        if self.banner:
            await self._side_effect(
                op,
                "update category banner",
                self.banner.update(BANNER_CATEGORY, slug, category.banner or Banner()),
            )
        if self.seo:
            await self._side_effect(
                op,
                "update category SEO",
                self.seo.update(SEO_CATEGORY, slug, category.seo or SEO()),
            )

    async def delete_category(self, slug: str) -> None:
        op = "category.DeleteCategory.ctrl"
        if self._categories.pop(slug, None) is None:
            raise NotFoundError()

        if self.banner:
            await self._side_effect(
                op, "delete category banner", self.banner.delete(BANNER_CATEGORY, slug)
            )
        if self.seo:
            await self._side_effect(op, "delete category SEO", self.seo.delete(SEO_CATEGORY, slug))

    # ===== Promotions =====

    async def list_promotions(self, page: int, size: int) -> Page:
        rows = sorted(
            self._promotions.values(),
            key=lambda p: p.created_at or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )
        return _paginate([p.model_copy(deep=True) for p in rows], page, size)

    async def promotion_search(self, query: str, page: int, size: int) -> Page:
        rows = [
            p.model_copy(deep=True)
            for p in self._promotions.values()
            if _contains(query, p.title, p.description)
        ]
        return _paginate(rows, page, size)

    async def list_promotion_items(self, slug: str, page: int, size: int) -> Page:
        promotion = self._promotions.get(slug)
        if promotion is None:
            raise NotFoundError()
        rows = [
            pi.model_copy(update={"item": self._items.get(pi.item_id)}, deep=True)
            for pi in promotion.promotion_items
        ]
        return _paginate(rows, page, size)

    async def get_promotion(self, slug: str) -> Promotion:
        promotion = self._promotions.get(slug)
        if promotion is None:
            raise NotFoundError()
        return promotion.model_copy(deep=True)

    def _attach_items(self, promotion: Promotion, slug: str) -> list:
        return [
            pi.model_copy(update={"promotion_slug": slug, "id": pi.id or n})
            for n, pi in enumerate(promotion.promotion_items, start=1)
        ]

    async def create_promotion(self, promotion: Promotion) -> Promotion:
        op = "promo.CreatePromotion.ctrl"
        slug = slugify(promotion.title) or uuid.uuid4().hex[:12]
        if slug in self._promotions:
            raise AlreadyExistsError()
        now = _now()
        stored = promotion.model_copy(
            update={
                "slug": slug,
                "promotion_items": self._attach_items(promotion, slug),
                "created_at": now,
                "updated_at": now,
            },
            deep=True,
        )
        self._promotions[slug] = stored

        if self.banner:
            await self._side_effect(
                op,
                "create promotion banner",
                self.banner.create(BANNER_PROMO, slug, promotion.banner or Banner()),
            )
        if self.seo:
            await self._side_effect(
                op,
                "create promotion SEO",
                self.seo.create(SEO_PROMO, slug, promotion.seo or SEO()),
                propagate=True,
            )
        return stored.model_copy(deep=True)

    async def update_promotion(self, slug: str, promotion: Promotion) -> Promotion:
        op = "promo.UpdatePromotion.ctrl"
        current = self._promotions.get(slug)
        if current is None:
            raise NotFoundError()
        updated = promotion.model_copy(
            update={
                "slug": slug,
                "promotion_items": self._attach_items(promotion, slug),
                "created_at": current.created_at,
                "updated_at": _now(),
            },
            deep=True,
        )
        self._promotions[slug] = updated

        if self.banner:
            await self._side_effect(
                op,
                "update promotion banner",
                self.banner.update(BANNER_PROMO, slug, promotion.banner or Banner()),
            )
        if self.seo:
            await self._side_effect(
                op, "update promotion SEO", self.seo.update(SEO_PROMO, slug, promotion.seo or SEO())
            )
        return updated.model_copy(deep=True)

    async def delete_promotion(self, slug: str) -> None:
        op = "promo.DeletePromotion.ctrl"
        if self._promotions.pop(slug, None) is None:
            raise NotFoundError()

        if self.banner:
            await self._side_effect(
                op, "delete promotion banner", self.banner.delete(BANNER_PROMO, slug)
            )
        if self.seo:
            await self._side_effect(op, "delete promotion SEO", self.seo.delete(SEO_PROMO, slug))

    # ===== Orders =====

    def _order_rows(self, filters: Dict[str, str]) -> List[Order]:
        rows = sorted(self._orders.values(), key=lambda o: o.id, reverse=True)
        status = filters.get("status")
        if status:
            rows = [o for o in rows if o.status.value == status]
        user_id = filters.get("user_id")
        if user_id:
            rows = [o for o in rows if str(o.user_id) == user_id]
        return rows

    async def list_orders(
        self, page: int, size: int, filters: Dict[str, str], sort: str
    ) -> Page:
        rows = _sort(self._order_rows(filters), sort, _ORDER_SORT_KEYS)
        return _paginate([o.model_copy(deep=True) for o in rows], page, size)

    async def list_user_orders(self, uid: uuid.UUID, page: int, size: int) -> Page:
        rows = [o.model_copy(deep=True) for o in self._order_rows({}) if o.user_id == uid]
        return _paginate(rows, page, size)

    async def get_order(self, order_id: int) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise NotFoundError()
        return order.model_copy(deep=True)

    def _price_lines(self, order: Order) -> Tuple[list, float]:
        lines, total = [], 0.0
        for n, line in enumerate(order.order_items, start=1):
            item = self._items.get(line.item_id)
            if item is None:
                raise NotFoundError()
            lines.append(line.model_copy(update={"id": line.id or n, "item": item}, deep=True))
            total += item.price * line.quantity
        return lines, round(total, 2)

    async def create_order(self, uid: uuid.UUID, order: Order) -> int:
        lines, total = self._price_lines(order)
        order_id = next(self._order_ids)
        now = _now()
        self._orders[order_id] = order.model_copy(
            update={
                "id": order_id,
                "user_id": uid,
                "status": OrderStatus.PENDING,
                "order_items": [line.model_copy(update={"order_id": order_id}) for line in lines],
                "total_amount": total,
                "created_at": now,
                "updated_at": now,
            },
            deep=True,
        )
        return order_id

    async def update_order(self, order_id: int, order: Order) -> None:
        current = self._orders.get(order_id)
        if current is None:
            raise NotFoundError()
        lines, total = self._price_lines(order)
        self._orders[order_id] = order.model_copy(
            update={
                "id": order_id,
                "user_id": current.user_id,
                "order_items": [line.model_copy(update={"order_id": order_id}) for line in lines],
                "total_amount": total,
                "created_at": current.created_at,
                "updated_at": _now(),
            },
            deep=True,
        )

    async def cancel_order(self, order_id: int) -> None:
        current = self._orders.get(order_id)
        if current is None:
            raise NotFoundError()
        self._orders[order_id] = current.model_copy(
            update={"status": OrderStatus.CANCELLED, "updated_at": _now()}
        )
