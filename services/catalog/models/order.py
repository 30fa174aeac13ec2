"""
Order models.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .item import Item


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderItem(BaseModel):
    id: Optional[int] = None
    quantity: int = 1
    order_id: Optional[int] = None
    item_id: uuid.UUID
    item: Optional[Item] = None


class Order(BaseModel):
    id: int = Field(default=0, ge=0, lt=2**64)
    status: OrderStatus = OrderStatus.PENDING
    total_amount: float = 0.0
    fio: str = ""
    tel: str = ""
    email: str = ""
    address: str = ""
    delivery: str = ""
    payment_method: str = ""
    user_id: Optional[uuid.UUID] = None
    order_items: List[OrderItem] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
