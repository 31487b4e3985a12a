"""
Cart schemas for the cart service RPC
"""

from typing import Any, List

from .base import BaseSchema

class CartItem(BaseSchema):
    """Line item exchanged with the cart service"""
    product_id: str
    quantity: int = 1
    description: str = ""
    color: str = ""
    size: str = ""
    price: float = 0
    image: str = ""

class CartResult(BaseSchema):
    """Cart service reply; items are passed through as the cart returned them"""
    items: List[Any]
