"""
Wishlist schemas for request/response validation
Also used as the in-memory domain representation of a wishlist document
"""

from pydantic import ConfigDict, Field, field_validator
from typing import Any, List, Optional
from datetime import datetime, timezone

from .base import BaseSchema

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class WishlistItem(BaseSchema):
    """Snapshot of a product taken when it was saved to the wishlist"""
    product_id: str = Field(..., min_length=1)
    name: str
    price: float = Field(..., gt=0)
    image: str = ""
    category: str = ""
    description: str = ""
    variants: List[Any] = Field(default_factory=list)
    reviews: List[Any] = Field(default_factory=list)
    total_stock: int = Field(0, ge=0)

class Wishlist(BaseSchema):
    """One wishlist document per user"""
    user_id: str = Field(..., min_length=1)
    items: List[WishlistItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def find_item(self, product_id: str) -> Optional[WishlistItem]:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    def has_item(self, product_id: str) -> bool:
        return self.find_item(product_id) is not None

    def touch(self) -> None:
        self.updated_at = utcnow()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "userId": "user-123",
                "items": [
                    {
                        "productId": "prod-1",
                        "name": "Linen Shirt",
                        "price": 49.9,
                        "image": "https://cdn.example.com/p/1.jpg",
                        "category": "shirts",
                        "description": "Relaxed fit",
                        "variants": [],
                        "reviews": [],
                        "totalStock": 12
                    }
                ],
                "createdAt": "2024-01-01T00:00:00Z",
                "updatedAt": "2024-01-01T00:00:00Z"
            }
        }
    )

class AddItemRequest(BaseSchema):
    """Body for adding to the wishlist or moving an item to the cart"""
    product_id: str = Field(..., description="Product ID")
    quantity: Optional[int] = Field(None, description="Quantity of the product")

    @field_validator("product_id")
    @classmethod
    def strip_product_id(cls, v: str) -> str:
        return v.strip()

class MoveToCartResponse(BaseSchema):
    """Summary returned after an item is moved into the cart"""
    success: bool
    message: str
    product_id: str
    cart_items: List[Any]
