"""
Cart migration client
Sends add-to-cart commands to the cart service
"""

from typing import List
import logging

import httpx

from app.core.exceptions import InvalidResponseException, ServiceUnavailableException
from app.schemas.cart import CartItem, CartResult

logger = logging.getLogger(__name__)

class CartClient:
    """
    RPC client for the cart service.

    ``add_to_cart`` mutates remote state and is not idempotent, so it is never
    retried here.
    """

    def __init__(self, http: httpx.AsyncClient, rpc_path: str):
        self.http = http
        self.rpc_path = rpc_path

    async def add_to_cart(self, user_id: str, items: List[CartItem]) -> CartResult:
        payload = {
            "userId": user_id,
            "items": [item.to_wire() for item in items],
        }

        try:
            response = await self.http.post(self.rpc_path, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Cart service call failed for user {user_id}: {e}")
            raise ServiceUnavailableException("Cart service unavailable")

        try:
            body = response.json()
        except ValueError:
            raise InvalidResponseException("Invalid response format from cart service")

        if not isinstance(body, dict) or not isinstance(body.get("items"), list):
            raise InvalidResponseException("Invalid response format from cart service")

        # Items are echoed back as the cart stores them
        return CartResult(items=body["items"])
