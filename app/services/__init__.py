"""Services package"""

from .cart_client import CartClient
from .context import ServiceContext
from .product_client import ProductClient
from .wishlist_service import WishlistService
from .wishlist_store import WishlistStore

__all__ = [
    "CartClient",
    "ServiceContext",
    "ProductClient",
    "WishlistService",
    "WishlistStore"
]
