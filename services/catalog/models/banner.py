"""
Banner models, manipulated only through the banner service.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BannerSlide(BaseModel):
    id: int = 0
    title: str = ""
    description: str = ""
    src: str = ""
    alt: str = ""
    button_text: str = ""
    button_href: str = ""
    banner_id: int = 0
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class Banner(BaseModel):
    id: int = 0
    obj_name: str = ""
    obj_pk: str = ""
    slides: List[BannerSlide] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
