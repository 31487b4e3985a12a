"""
Wishlist service
Business rules for wishlist mutations, read-through caching and cart migration
"""

from typing import Any, List, Optional
import logging

from app.core.exceptions import (
    WishlistServiceException,
    BusinessRuleViolationException,
    CartMigrationIncompleteException,
    InvalidInputException,
    ItemAlreadyExistsException,
    ItemNotFoundException,
    WishlistNotFoundException,
)
from app.schemas.cart import CartItem
from app.schemas.product import ProductDetails
from app.schemas.wishlist import MoveToCartResponse, Wishlist, WishlistItem
from .context import ServiceContext
from .wishlist_store import WishlistStore

logger = logging.getLogger(__name__)

def wishlist_cache_key(user_id: str) -> str:
    return f"wishlist:{user_id}"

class WishlistService:
    """
    Wishlist orchestration service

    Reads go through the per-process cache under ``wishlist:{userId}``.
    Mutations always load the stored document, never a cached copy, and
    invalidate that key once the save has succeeded. Cached wishlists are
    stored and returned as copies.
    """

    def __init__(self, context: ServiceContext, store: WishlistStore):
        self.context = context
        self.store = store
        self.cache = context.cache
        self.products = context.product_client
        self.cart = context.cart_client
        self.settings = context.settings

    async def get_wishlist(self, user_id: str) -> Wishlist:
        """
        Get the user's wishlist

        Raises:
            WishlistNotFoundException: The user has never added an item
        """
        logger.debug(f"Getting wishlist for user: {user_id}")
        wishlist = await self._find_wishlist(user_id)
        if wishlist is None:
            logger.warning(f"Wishlist not found for user: {user_id}")
            raise WishlistNotFoundException()
        return wishlist

    async def add_item(
        self,
        user_id: str,
        product_id: str,
        quantity: Optional[int] = None
    ) -> Wishlist:
        """
        Add a product snapshot to the wishlist, creating the wishlist on first use

        Args:
            user_id: Authenticated user id
            product_id: Product to save
            quantity: Accepted for parity with the cart body; validated, not stored

        Returns:
            The saved wishlist
        """
        product_id = self._require_product_id(product_id)
        self._validate_quantity(quantity)
        logger.debug(f"Adding item to wishlist for user: {user_id}, product: {product_id}")

        product = await self.products.fetch(product_id)

        wishlist = await self.store.find_by_user(user_id)
        if wishlist is None:
            logger.debug(f"Creating new wishlist for user: {user_id}")
            wishlist = self.store.create(user_id)

        if wishlist.has_item(product_id):
            logger.warning(f"Item {product_id} already exists in wishlist for user: {user_id}")
            raise ItemAlreadyExistsException()

        if len(wishlist.items) >= self.settings.WISHLIST_MAX_ITEMS:
            raise BusinessRuleViolationException(
                f"Wishlist cannot exceed {self.settings.WISHLIST_MAX_ITEMS} items"
            )

        wishlist.items.append(self._snapshot(product_id, product))
        wishlist.touch()

        saved = await self.store.save(wishlist)
        await self._invalidate(user_id)
        logger.info(f"Item {product_id} added to wishlist for user: {user_id} ({len(saved.items)} items)")
        return saved

    async def remove_item(self, user_id: str, product_id: str) -> Wishlist:
        """Remove one product, keeping the order of the remaining items"""
        logger.debug(f"Removing item from wishlist for user: {user_id}, product: {product_id}")

        wishlist = await self.store.find_by_user(user_id)
        if wishlist is None:
            logger.warning(f"Wishlist not found for user: {user_id}")
            raise WishlistNotFoundException()

        remaining = [item for item in wishlist.items if item.product_id != product_id]
        if len(remaining) == len(wishlist.items):
            logger.warning(f"Item {product_id} not found in wishlist for user: {user_id}")
            raise ItemNotFoundException()

        wishlist.items = remaining
        wishlist.touch()

        saved = await self.store.save(wishlist)
        await self._invalidate(user_id)
        logger.info(f"Item {product_id} removed from wishlist for user: {user_id}")
        return saved

    async def clear_wishlist(self, user_id: str) -> Wishlist:
        """Empty the wishlist; the document itself is kept"""
        logger.debug(f"Clearing wishlist for user: {user_id}")

        wishlist = await self.store.find_by_user(user_id)
        if wishlist is None:
            logger.warning(f"Wishlist not found for user: {user_id}")
            raise WishlistNotFoundException()

        previous = len(wishlist.items)
        wishlist.items = []
        wishlist.touch()

        saved = await self.store.save(wishlist)
        await self._invalidate(user_id)
        logger.info(f"Wishlist cleared for user: {user_id} ({previous} items removed)")
        return saved

    async def move_to_cart(
        self,
        user_id: str,
        product_id: str,
        quantity: Optional[int] = None
    ) -> MoveToCartResponse:
        """
        Move a wishlist item into the cart

        Two independent steps: add to the cart service, then remove from the
        wishlist. There is no compensating cart removal, so if the second step
        fails the item ends up in both places and
        CartMigrationIncompleteException is raised for manual reconciliation.
        """
        product_id = self._require_product_id(product_id)
        self._validate_quantity(quantity)

        # Fresh product data; the stored snapshot may be stale
        product = await self.products.fetch(product_id)

        wishlist = await self.store.find_by_user(user_id)
        if wishlist is None:
            raise WishlistNotFoundException()
        if not wishlist.has_item(product_id):
            raise ItemNotFoundException()

        cart_item = CartItem(
            product_id=product_id,
            quantity=quantity or 1,
            description=product.description,
            color="",
            size="",
            price=product.price,
            image=product.primary_image,
        )
        result = await self.cart.add_to_cart(user_id, [cart_item])
        logger.info(f"Item {product_id} added to cart for user: {user_id}")

        try:
            await self.remove_item(user_id, product_id)
        except Exception as e:
            reason = str(e.detail) if isinstance(e, WishlistServiceException) else str(e)
            self._report_incomplete_migration(user_id, product_id, reason, result.items)
            raise CartMigrationIncompleteException(user_id, product_id, reason) from e

        return MoveToCartResponse(
            success=True,
            message="Item added to cart successfully",
            product_id=product_id,
            cart_items=result.items,
        )

    async def clear_cache(self) -> None:
        """Drop every cached wishlist and product"""
        await self.cache.clear()

    async def _find_wishlist(self, user_id: str) -> Optional[Wishlist]:
        cache_key = wishlist_cache_key(user_id)
        cached = await self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Returning cached wishlist for user: {user_id}")
            return cached.model_copy(deep=True)

        wishlist = await self.store.find_by_user(user_id)
        if wishlist is not None:
            await self.cache.set(cache_key, wishlist.model_copy(deep=True))
        return wishlist

    async def _invalidate(self, user_id: str) -> None:
        await self.cache.delete(wishlist_cache_key(user_id))

    def _require_product_id(self, product_id: Optional[str]) -> str:
        if product_id is None or not product_id.strip():
            raise InvalidInputException("Product ID is required")
        return product_id.strip()

    def _validate_quantity(self, quantity: Optional[int]) -> None:
        if quantity is None:
            return
        low = self.settings.MIN_QUANTITY_PER_ITEM
        high = self.settings.MAX_QUANTITY_PER_ITEM
        if not low <= quantity <= high:
            raise InvalidInputException(f"quantity must be between {low} and {high}")

    @staticmethod
    def _snapshot(product_id: str, product: ProductDetails) -> WishlistItem:
        return WishlistItem(
            product_id=product_id,
            name=product.name,
            price=product.price,
            image=product.primary_image,
            category=product.category,
            description=product.description,
            variants=list(product.variants),
            reviews=list(product.reviews),
            total_stock=product.total_stock,
        )

    @staticmethod
    def _report_incomplete_migration(user_id: str, product_id: str, reason: str, cart_items: List[Any]) -> None:
        logger.critical(
            f"Cart migration incomplete: product {product_id} is in the cart AND the wishlist "
            f"of user {user_id}; wishlist removal failed: {reason}; "
            f"cart items: {cart_items}"
        )
