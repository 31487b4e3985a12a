"""
Service context
Process-wide collaborators handed to the wishlist service at construction
"""

from dataclasses import dataclass
from typing import Optional
import logging

import httpx

from app.core.cache import TTLCache
from app.core.config import Settings
from .product_client import ProductClient
from .cart_client import CartClient

logger = logging.getLogger(__name__)

@dataclass
class ServiceContext:
    """Shared cache, RPC clients and settings for one worker process"""
    settings: Settings
    cache: TTLCache
    product_client: ProductClient
    cart_client: CartClient
    product_http: Optional[httpx.AsyncClient] = None
    cart_http: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceContext":
        cache = TTLCache(ttl=settings.CACHE_TTL_SECONDS, max_entries=settings.CACHE_MAX_ENTRIES)
        timeout = httpx.Timeout(settings.RPC_TIMEOUT_SECONDS)
        product_http = httpx.AsyncClient(base_url=settings.PRODUCT_SERVICE_URL, timeout=timeout)
        cart_http = httpx.AsyncClient(base_url=settings.CART_SERVICE_URL, timeout=timeout)
        return cls(
            settings=settings,
            cache=cache,
            product_client=ProductClient(product_http, cache, settings.PRODUCT_RPC_PATH),
            cart_client=CartClient(cart_http, settings.CART_RPC_PATH),
            product_http=product_http,
            cart_http=cart_http,
        )

    async def aclose(self) -> None:
        """Close the upstream HTTP clients this context opened"""
        for client in (self.product_http, self.cart_http):
            if client is not None:
                await client.aclose()
        logger.info("RPC clients closed")
