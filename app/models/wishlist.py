"""
Wishlist model: one document-style row per user
"""

from sqlalchemy import Column, String, JSON, Index
from sqlalchemy.orm import validates

from .base import BaseModel, TimestampedModel, UUIDModel

class Wishlist(BaseModel, UUIDModel, TimestampedModel):
    """User wishlist

    ``items`` holds the ordered list of product snapshots as JSON objects with
    camelCase keys, the same shape the API returns.
    """

    __tablename__ = "wishlists"

    user_id = Column(String(255), nullable=False)
    items = Column(JSON, nullable=False, default=list)

    __table_args__ = (
        Index("idx_wishlist_user", "user_id", unique=True),
    )

    @validates("items")
    def validate_items(self, key, items):
        if items is None:
            return []
        if not isinstance(items, list):
            raise ValueError("items must be a list")
        return items
