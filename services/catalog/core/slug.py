"""
URL slugs for categories and promotions.

Titles are transliterated (Cyrillic included) by python-slugify, so every
title with letters or digits yields a readable ASCII slug.
"""

from slugify import slugify as _slugify

SLUG_MAX_LENGTH = 255


def slugify(value: str) -> str:
    """Lowercase transliterated words joined by hyphens; "" when nothing survives."""
    return _slugify(value, max_length=SLUG_MAX_LENGTH, word_boundary=True)
