"""
Field validation for inbound resources.

Each validator raises ValidationError naming the first missing field.
"""

from ..models import Category, Item, Order, Promotion
from .exceptions import ValidationError


def _require(value, message: str) -> None:
    if isinstance(value, str):
        value = value.strip()
    if not value:
        raise ValidationError(message)


def validate_item(item: Item) -> None:
    _require(item.title, "missing title")
    _require(item.description, "missing description")
    if item.price <= 0:
        raise ValidationError("missing price")
    _require(item.src, "missing src")


def validate_category(category: Category) -> None:
    _require(category.title, "missing title")


def validate_promotion(promotion: Promotion) -> None:
    _require(promotion.title, "missing title")
    _require(promotion.description, "missing description")
    _require(promotion.src, "missing src")


def validate_order(order: Order) -> None:
    _require(order.fio, "missing fio")
    _require(order.tel, "missing tel")
    _require(order.email, "missing email")
    _require(order.address, "missing address")
