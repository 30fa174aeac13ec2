"""
SEO record attached to items, categories and promotions.
"""

from typing import Optional

from pydantic import BaseModel


class SEO(BaseModel):
    id: Optional[int] = None
    title: str = ""
    description: str = ""
    keywords: str = ""
    og_title: str = ""
    og_description: str = ""
    og_image: str = ""
    obj_name: str = ""
    obj_pk: str = ""
