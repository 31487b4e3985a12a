"""Tests for the cart migration client."""

import httpx
import pytest

from app.core.exceptions import InvalidResponseException, ServiceUnavailableException
from app.schemas.cart import CartItem
from app.services.cart_client import CartClient


@pytest.fixture
def cart_client(cart_service):
    http = httpx.AsyncClient(transport=httpx.MockTransport(cart_service.handler), base_url="http://cart")
    return CartClient(http, "/cart.CartService/AddToCart")


def item(**overrides):
    fields = dict(product_id="prod-a", quantity=2, description="Alpha", price=49.9, image="https://img/a.jpg")
    fields.update(overrides)
    return CartItem(**fields)


class TestAddToCart:

    @pytest.mark.asyncio
    async def test_request_payload_shape(self, cart_client, cart_service):
        await cart_client.add_to_cart("user-1", [item()])

        assert cart_service.requests == [{
            "userId": "user-1",
            "items": [{
                "productId": "prod-a",
                "quantity": 2,
                "description": "Alpha",
                "color": "",
                "size": "",
                "price": 49.9,
                "image": "https://img/a.jpg",
            }],
        }]

    @pytest.mark.asyncio
    async def test_returns_cart_items(self, cart_client):
        result = await cart_client.add_to_cart("user-1", [item()])

        assert [i["productId"] for i in result.items] == ["prod-a"]
        assert result.items[0]["quantity"] == 2

    @pytest.mark.asyncio
    async def test_reply_items_are_passed_through(self, cart_client, cart_service):
        cart_service.mode = "reshaped"

        result = await cart_client.add_to_cart("user-1", [item()])

        assert result.items == [
            {"productId": "prod-a", "quantity": 2, "image": ["https://img/a.jpg"], "sku": None}
        ]

    @pytest.mark.asyncio
    async def test_empty_items_list_is_accepted(self):
        http = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"items": []})),
            base_url="http://cart",
        )

        result = await CartClient(http, "/add").add_to_cart("user-1", [item()])

        assert result.items == []

    def test_quantity_defaults_to_one(self):
        assert CartItem(product_id="p").quantity == 1

    @pytest.mark.asyncio
    async def test_items_not_a_list(self, cart_client, cart_service):
        cart_service.mode = "malformed"

        with pytest.raises(InvalidResponseException):
            await cart_client.add_to_cart("user-1", [item()])

    @pytest.mark.asyncio
    async def test_items_missing(self):
        http = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"ok": True})),
            base_url="http://cart",
        )

        with pytest.raises(InvalidResponseException):
            await CartClient(http, "/add").add_to_cart("user-1", [item()])

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        http = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")),
            base_url="http://cart",
        )

        with pytest.raises(InvalidResponseException):
            await CartClient(http, "/add").add_to_cart("user-1", [item()])

    @pytest.mark.asyncio
    async def test_server_error_is_service_unavailable(self, cart_client, cart_service):
        cart_service.mode = "error"

        with pytest.raises(ServiceUnavailableException):
            await cart_client.add_to_cart("user-1", [item()])

    @pytest.mark.asyncio
    async def test_connection_error_is_service_unavailable(self, cart_client, cart_service):
        cart_service.mode = "unavailable"

        with pytest.raises(ServiceUnavailableException):
            await cart_client.add_to_cart("user-1", [item()])

        # Not retried
        assert len(cart_service.requests) == 1
