import uuid
from typing import Optional

from pydantic import BaseModel, Field

from .item import Item


class Favorite(BaseModel):
    id: Optional[int] = None
    user_id: Optional[uuid.UUID] = None
    item_id: uuid.UUID = Field(default_factory=lambda: uuid.UUID(int=0))
    item: Optional[Item] = None
