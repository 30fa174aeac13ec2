import re
import uuid
from unittest.mock import AsyncMock

import pytest

from services.catalog.core.exceptions import (
    AlreadyExistsError,
    NotFoundError,
    ServiceNotFoundError,
)
from services.catalog.core.slug import slugify
from services.catalog.models import (
    SEO,
    Category,
    Filter,
    Item,
    ItemAttribute,
    Order,
    OrderItem,
    OrderStatus,
    Promotion,
    PromotionItem,
    RelatedProduct,
)
from services.catalog.services.banner import BannerClient
from services.catalog.services.memory_catalog import InMemoryCatalog
from services.catalog.services.seo import SEOClient

USER = uuid.UUID("5f0c6a7e-3b51-4d0e-9a55-0d8f4f0f2a11")


def _item(title="Green tea", price=10.0, **extra) -> Item:
    return Item(title=title, description="tea", price=price, src="/t.png", **extra)


@pytest.fixture
def seo():
    return AsyncMock(spec=SEOClient)


@pytest.fixture
def banner():
    return AsyncMock(spec=BannerClient)


@pytest.fixture
def catalog(seo, banner):
    return InMemoryCatalog(seo=seo, banner=banner)


@pytest.mark.asyncio
async def test_create_item_assigns_id_and_creates_seo(catalog, seo):
    created = await catalog.create_item(_item(seo=SEO(title="Buy tea")))

    assert created.id != uuid.UUID(int=0)
    assert created.created_at is not None
    seo.create.assert_awaited_once()
    name, pk, record = seo.create.await_args.args
    assert (name, pk) == ("item", str(created.id))
    assert record.title == "Buy tea"
    assert (await catalog.get_item(created.id)).title == "Green tea"


@pytest.mark.asyncio
async def test_item_seo_create_failure_propagates(catalog, seo):
    seo.create.side_effect = ServiceNotFoundError("seo")

    with pytest.raises(ServiceNotFoundError):
        await catalog.create_item(_item())


@pytest.mark.asyncio
async def test_update_side_effect_failure_is_logged_only(catalog, seo):
    created = await catalog.create_item(_item())
    seo.update.side_effect = ServiceNotFoundError("seo")

    updated = await catalog.update_item(created.id, _item(title="Black tea"))

    assert updated.title == "Black tea"
    assert updated.created_at == created.created_at


@pytest.mark.asyncio
async def test_missing_item(catalog):
    with pytest.raises(NotFoundError):
        await catalog.get_item(uuid.uuid4())
    with pytest.raises(NotFoundError):
        await catalog.delete_item(uuid.uuid4())


@pytest.mark.asyncio
async def test_delete_item_removes_favorites_and_seo(catalog, seo):
    created = await catalog.create_item(_item())
    await catalog.add_to_favorites(USER, created.id)

    await catalog.delete_item(created.id)

    assert await catalog.list_favorites(USER) == []
    seo.delete.assert_awaited_once_with("item", str(created.id))


@pytest.mark.asyncio
async def test_favorites(catalog):
    created = await catalog.create_item(_item())

    favorite = await catalog.add_to_favorites(USER, created.id)
    assert favorite.item.title == "Green tea"

    with pytest.raises(AlreadyExistsError):
        await catalog.add_to_favorites(USER, created.id)
    with pytest.raises(NotFoundError):
        await catalog.add_to_favorites(USER, uuid.uuid4())

    await catalog.remove_from_favorites(USER, created.id)
    with pytest.raises(NotFoundError):
        await catalog.remove_from_favorites(USER, created.id)


@pytest.mark.asyncio
async def test_pagination_windows(catalog):
    for n in range(5):
        await catalog.create_item(_item(title=f"Tea {n}"))

    page = await catalog.list_items(page=3, size=2)

    assert len(page.data) == 1
    assert page.count == 5
    assert page.total_pages == 3
    assert not page.has_next_page


@pytest.mark.asyncio
async def test_labels_and_search(catalog):
    await catalog.create_item(_item(title="Sencha", is_hit=True))
    await catalog.create_item(_item(title="Oolong", is_rec=True, article="OL-1"))

    hits = await catalog.list_items_by_label("hit", 1, 40)
    recs = await catalog.list_items_by_label("rec", 1, 40)
    found = await catalog.item_search("ol-1", 1, 10)

    assert [i.title for i in hits.data] == ["Sencha"]
    assert [i.title for i in recs.data] == ["Oolong"]
    assert [i.title for i in found.data] == ["Oolong"]


@pytest.mark.asyncio
async def test_category_items_filters_and_sort(catalog):
    red = [ItemAttribute(name="color", value="Red")]
    green = [ItemAttribute(name="color", value="green")]
    await catalog.create_item(_item("A", 5, categories=["teas"], attributes=red))
    await catalog.create_item(_item("B", 15, categories=["teas"], attributes=green))
    await catalog.create_item(_item("C", 25, categories=["teas"], attributes=red))
    await catalog.create_item(_item("D", 30, categories=["coffee"], attributes=red))

    page = await catalog.list_category_items(
        "teas", 1, 40, {"color": "red", "min_price": "10"}, "-price"
    )
    by_price = await catalog.list_category_items("teas", 1, 40, {}, "price")

    assert [i.title for i in page.data] == ["C"]
    assert [i.title for i in by_price.data] == ["A", "B", "C"]


@pytest.mark.asyncio
async def test_related_items(catalog):
    other = await catalog.create_item(_item("Cup"))
    main = await catalog.create_item(
        _item("Tea", related_products=[RelatedProduct(related_item_id=other.id)])
    )

    related = await catalog.list_related_items(main.id)

    assert related[0].related_item.title == "Cup"
    assert related[0].item_id == main.id


@pytest.mark.asyncio
async def test_create_category_slug_and_side_effects(catalog, seo, banner):
    category = Category(title="Green Teas", filters=[Filter(name="color", values=["green"])])

    slug = await catalog.create_category(category)

    assert slug == "green-teas"
    banner.create.assert_awaited_once()
    assert banner.create.await_args.args[:2] == ("category", "green-teas")
    seo.create.assert_awaited_once()
    assert seo.create.await_args.args[:2] == ("category", "green-teas")

    filters = await catalog.list_category_filters("green-teas")
    assert filters[0].category_slug == "green-teas"

    with pytest.raises(AlreadyExistsError):
        await catalog.create_category(Category(title="Green teas"))


@pytest.mark.asyncio
async def test_cyrillic_titles_get_readable_slugs(catalog):
    slug = await catalog.create_category(Category(title="Мужская обувь"))
    promotion = await catalog.create_promotion(
        Promotion(title="Летняя распродажа", description="-30%", src="/s.png")
    )

    assert re.fullmatch(r"[a-z0-9]+(-[a-z0-9]+)*", slug)
    assert slug.startswith("muzhsk")
    assert slug == slugify("Мужская обувь")
    assert (await catalog.get_category(slug)).title == "Мужская обувь"
    assert promotion.slug == slugify("Летняя распродажа")
    assert "-" in promotion.slug

    with pytest.raises(AlreadyExistsError):
        await catalog.create_category(Category(title="Мужская обувь"))
    with pytest.raises(AlreadyExistsError):
        await catalog.create_promotion(
            Promotion(title="Летняя распродажа", description="-30%", src="/s.png")
        )


@pytest.mark.asyncio
async def test_category_banner_failure_is_logged_only(catalog, banner):
    banner.create.side_effect = ServiceNotFoundError("etc")

    assert await catalog.create_category(Category(title="Teas")) == "teas"


@pytest.mark.asyncio
async def test_category_hydration(catalog):
    await catalog.create_category(Category(title="Teas"))
    await catalog.create_category(Category(title="Green", parent_slug="teas"))
    await catalog.create_item(_item(categories=["teas"]))

    teas = await catalog.get_category("teas")

    assert teas.product_quantity == 1
    assert [c.slug for c in teas.children] == ["green"]


@pytest.mark.asyncio
async def test_filters_search(catalog):
    await catalog.create_category(
        Category(title="Teas", filters=[Filter(name="color", values=["green", "black"])])
    )

    page = await catalog.category_filters_search("blac", 1, 10)

    assert [f.name for f in page.data] == ["color"]


@pytest.mark.asyncio
async def test_promotion_lifecycle(catalog, seo, banner):
    item = await catalog.create_item(_item())
    created = await catalog.create_promotion(
        Promotion(
            title="Summer Sale",
            description="30% off",
            src="/s.png",
            promotion_items=[PromotionItem(item_id=item.id, discount=30)],
        )
    )

    assert created.slug == "summer-sale"
    assert created.promotion_items[0].promotion_slug == "summer-sale"
    assert seo.create.await_args.args[:2] == ("promo", "summer-sale")

    items = await catalog.list_promotion_items("summer-sale", 1, 40)
    assert items.data[0].item.id == item.id

    await catalog.delete_promotion("summer-sale")
    banner.delete.assert_awaited_once_with("promo", "summer-sale")
    with pytest.raises(NotFoundError):
        await catalog.get_promotion("summer-sale")


@pytest.mark.asyncio
async def test_orders(catalog):
    tea = await catalog.create_item(_item(price=12.5))
    order = Order(
        fio="Ivan Petrov",
        tel="+70000000000",
        email="ivan@example.com",
        address="Main st. 1",
        order_items=[OrderItem(item_id=tea.id, quantity=3)],
    )

    order_id = await catalog.create_order(USER, order)
    stored = await catalog.get_order(order_id)

    assert stored.user_id == USER
    assert stored.total_amount == 37.5
    assert stored.status == OrderStatus.PENDING
    assert stored.order_items[0].order_id == order_id

    mine = await catalog.list_user_orders(USER, 1, 40)
    assert [o.id for o in mine.data] == [order_id]

    await catalog.cancel_order(order_id)
    cancelled = await catalog.list_orders(1, 40, {"status": "cancelled"}, "")
    assert [o.id for o in cancelled.data] == [order_id]


@pytest.mark.asyncio
async def test_order_with_unknown_item(catalog):
    order = Order(fio="x", order_items=[OrderItem(item_id=uuid.uuid4())])

    with pytest.raises(NotFoundError):
        await catalog.create_order(USER, order)


@pytest.mark.asyncio
async def test_runs_without_side_effect_clients():
    catalog = InMemoryCatalog()

    created = await catalog.create_item(_item())

    assert (await catalog.get_item(created.id)).id == created.id
