"""Shared fixtures: in-memory database, fake upstream services, wired service context."""

import json
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.cache import TTLCache
from app.core.config import Settings
from app.models.base import Base
from app.services.cart_client import CartClient
from app.services.context import ServiceContext
from app.services.product_client import ProductClient
from app.services.wishlist_service import WishlistService
from app.services.wishlist_store import WishlistStore


def make_product(name="Linen Shirt", price=49.9, **extra):
    product = {
        "name": name,
        "price": price,
        "images": ["https://cdn.example.com/p/%s.jpg" % name.lower().replace(" ", "-")],
        "category": "shirts",
        "description": "%s description" % name,
        "variants": [{"size": "M", "color": "blue"}],
        "totalStock": 12,
        "reviews": [{"rating": 5, "text": "great"}],
    }
    product.update(extra)
    return product


class FakeProductService:
    """Product RPC double served through httpx.MockTransport."""

    def __init__(self):
        self.products = {}
        self.calls = []
        self.unavailable = False

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.calls.append(body["productId"])
        if self.unavailable:
            raise httpx.ConnectError("connection refused", request=request)
        product = self.products.get(body["productId"])
        if product is None:
            return httpx.Response(200, json={"code": 404, "data": ""})
        return httpx.Response(200, json={"code": 200, "data": json.dumps(product)})


class FakeCartService:
    """Cart RPC double; echoes the accepted items back."""

    def __init__(self):
        self.requests = []
        self.mode = "ok"

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        if self.mode == "unavailable":
            raise httpx.ConnectError("connection refused", request=request)
        if self.mode == "error":
            return httpx.Response(500, json={"message": "boom"})
        if self.mode == "malformed":
            return httpx.Response(200, json={"items": None})
        if self.mode == "reshaped":
            # Cart stores its own representation of each line
            items = [
                {"productId": i["productId"], "quantity": i["quantity"], "image": [i["image"]], "sku": None}
                for i in body["items"]
            ]
            return httpx.Response(200, json={"items": items})
        return httpx.Response(200, json={"items": body["items"]})


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        ENVIRONMENT="test",
        RATE_LIMIT_ENABLED=False,
        WISHLIST_MAX_ITEMS=5,
    )


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def product_service():
    service = FakeProductService()
    service.products["prod-a"] = make_product("Alpha")
    service.products["prod-b"] = make_product("Bravo", price=19.5)
    service.products["prod-c"] = make_product("Charlie", price=7)
    return service


@pytest.fixture
def cart_service():
    return FakeCartService()


@pytest.fixture
def cache():
    return TTLCache(ttl=300)


def build_context(settings, cache, product_service, cart_service):
    """Context wired to the fake upstreams; one per simulated worker process"""
    product_http = httpx.AsyncClient(
        transport=httpx.MockTransport(product_service.handler), base_url="http://product"
    )
    cart_http = httpx.AsyncClient(
        transport=httpx.MockTransport(cart_service.handler), base_url="http://cart"
    )
    return ServiceContext(
        settings=settings,
        cache=cache,
        product_client=ProductClient(product_http, cache, settings.PRODUCT_RPC_PATH),
        cart_client=CartClient(cart_http, settings.CART_RPC_PATH),
        product_http=product_http,
        cart_http=cart_http,
    )


@pytest_asyncio.fixture
async def context(settings, cache, product_service, cart_service):
    context = build_context(settings, cache, product_service, cart_service)
    yield context
    await context.aclose()


@pytest.fixture
def service(context, db_session):
    return WishlistService(context, WishlistStore(db_session))
