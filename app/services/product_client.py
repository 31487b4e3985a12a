"""
Product lookup client
Fetches product details from the product service and caches successful lookups
"""

from typing import Any, Dict, List
import json
import logging

import httpx
from pydantic import ValidationError

from app.core.cache import TTLCache
from app.core.exceptions import (
    InvalidResponseException,
    ProductNotFoundException,
    ServiceUnavailableException,
)
from app.schemas.product import ProductDetails

logger = logging.getLogger(__name__)

PRODUCT_FOUND = 200

def product_cache_key(product_id: str) -> str:
    return f"product:{product_id}"

class ProductClient:
    """
    RPC client for the product service.

    The service answers ``{"code": int, "data": "<json string>"}``; ``code``
    200 means found and ``data`` must decode to an object carrying at least
    ``name`` and a positive ``price``.
    """

    def __init__(self, http: httpx.AsyncClient, cache: TTLCache, rpc_path: str):
        self.http = http
        self.cache = cache
        self.rpc_path = rpc_path

    async def fetch(self, product_id: str) -> ProductDetails:
        cache_key = product_cache_key(product_id)
        cached = await self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Returning cached product details for: {product_id}")
            return cached

        envelope = await self._call(product_id)

        code = envelope.get("code")
        if code is None:
            raise InvalidResponseException("Product service response has no status code")
        if code != PRODUCT_FOUND:
            logger.warning(f"Product {product_id} not found (code={code})")
            raise ProductNotFoundException()

        product = self._parse_payload(product_id, envelope.get("data"))
        await self.cache.set(cache_key, product)
        return product

    async def _call(self, product_id: str) -> Dict[str, Any]:
        try:
            response = await self.http.post(self.rpc_path, json={"productId": product_id})
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Product service call failed for {product_id}: {e}")
            raise ServiceUnavailableException("Product service unavailable")

        try:
            envelope = response.json()
        except ValueError:
            raise InvalidResponseException("Product service returned a non-JSON response")
        if not isinstance(envelope, dict):
            raise InvalidResponseException("Product service returned an unexpected response")
        return envelope

    def _parse_payload(self, product_id: str, data: Any) -> ProductDetails:
        if isinstance(data, (str, bytes)):
            try:
                data = json.loads(data)
            except ValueError:
                raise InvalidResponseException("Invalid product data format")
        if not isinstance(data, dict):
            raise InvalidResponseException("Invalid product data format")

        if not data.get("name") or data.get("price") in (None, ""):
            raise InvalidResponseException("Invalid product data format")

        try:
            return ProductDetails(
                name=data["name"],
                price=data["price"],
                images=_images(data),
                category=data.get("category") or "",
                description=data.get("description") or "",
                variants=data.get("variants") or [],
                total_stock=data.get("totalStock") or 0,
                reviews=data.get("reviews") or [],
            )
        except ValidationError as e:
            logger.warning(f"Product {product_id} payload rejected: {e.error_count()} errors")
            raise InvalidResponseException("Invalid product data format")

def _images(data: Dict[str, Any]) -> List[str]:
    """Normalize ``images`` (or the older ``image``/``url`` fields) to a list of strings"""
    for field in ("images", "image", "url"):
        value = data.get(field)
        if not value:
            continue
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(v) for v in value if v]
    return []
