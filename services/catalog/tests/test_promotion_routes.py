import uuid

from services.catalog.core.exceptions import NotFoundError, ServiceNotFoundError
from services.catalog.models import Page, Promotion, PromotionItem

PROMO_BODY = {
    "title": "Summer sale",
    "description": "Up to 30% off",
    "src": "/img/summer.png",
}


def test_unknown_promotion_is_not_found(client, controller):
    controller.get_promotion.side_effect = NotFoundError()

    response = client.get("/api/promotions/invalid-slug")

    assert response.status_code == 404
    assert response.json() == {"error": "not found"}
    controller.get_promotion.assert_awaited_once_with("invalid-slug")


def test_promotion_items_are_paginated(client, controller):
    line = PromotionItem(id=1, discount=30, promotion_slug="summer-sale", item_id=uuid.uuid4())
    controller.list_promotion_items.return_value = Page.build([line], count=1, page=1, size=40)

    response = client.get("/api/promotions/items/summer-sale")

    assert response.status_code == 200
    body = response.json()
    assert body["data"][0]["discount"] == 30
    assert body["count"] == 1
    controller.list_promotion_items.assert_awaited_once_with("summer-sale", 1, 40)


def test_promotion_search(client, controller):
    controller.promotion_search.return_value = Page.build([], count=0, page=1, size=10)

    client.get("/api/promotions/search?q=summer")

    controller.promotion_search.assert_awaited_once_with("summer", 1, 10)


def test_create_promotion_returns_slug(client, controller, auth_headers):
    controller.create_promotion.return_value = Promotion(slug="summer-sale", **PROMO_BODY)

    response = client.post("/api/promotions", json=PROMO_BODY, headers=auth_headers)

    assert response.status_code == 201
    assert response.json() == {"data": "summer-sale"}


def test_create_promotion_remote_failure_is_generic(client, controller, auth_headers):
    controller.create_promotion.side_effect = ServiceNotFoundError("seo")

    response = client.post("/api/promotions", json=PROMO_BODY, headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "internal server error"}


def test_delete_promotion(client, controller, auth_headers):
    response = client.delete("/api/promotions/summer-sale", headers=auth_headers)

    assert response.status_code == 204
    controller.delete_promotion.assert_awaited_once_with("summer-sale")
