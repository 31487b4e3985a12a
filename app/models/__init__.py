"""Models package initialization"""

from .base import Base
from .wishlist import Wishlist

__all__ = ["Base", "Wishlist"]
