"""Product schemas for data returned by the product service"""

from pydantic import Field
from typing import Any, List

from .base import BaseSchema

class ProductDetails(BaseSchema):
    """Product fields the wishlist copies from the catalog"""
    name: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)
    images: List[str] = Field(default_factory=list)
    category: str = ""
    description: str = ""
    variants: List[Any] = Field(default_factory=list)
    total_stock: int = Field(0, ge=0)
    reviews: List[Any] = Field(default_factory=list)

    @property
    def primary_image(self) -> str:
        return self.images[0] if self.images else ""
