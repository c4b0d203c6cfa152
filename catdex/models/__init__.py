"""Catdex models"""

from catdex.models.cat import LISTING_LIMIT, PROJECT_NAME, Cat, IndexPage

__all__ = [
    "LISTING_LIMIT",
    "PROJECT_NAME",
    "Cat",
    "IndexPage",
]
