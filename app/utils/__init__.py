"""Utilities package"""

from .dependencies import get_current_user_id, get_service_context, get_wishlist_service

__all__ = [
    "get_current_user_id",
    "get_service_context",
    "get_wishlist_service"
]
