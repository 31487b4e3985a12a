"""Wishlist router"""

from fastapi import APIRouter, Depends, Request, status
import logging

from app.middleware.rate_limit import burst_limit
from app.schemas.wishlist import AddItemRequest, MoveToCartResponse, Wishlist
from app.services.wishlist_service import WishlistService
from app.utils.dependencies import get_current_user_id, get_wishlist_service

logger = logging.getLogger(__name__)

router = APIRouter()

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "N/A")

@router.get("", response_model=Wishlist, response_model_by_alias=True)
async def get_wishlist(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Get the current user's wishlist"""
    logger.info(f"Getting wishlist for user {user_id} (request {_request_id(request)})")
    wishlist = await service.get_wishlist(user_id)
    return wishlist

@router.post(
    "/items",
    response_model=Wishlist,
    status_code=status.HTTP_201_CREATED,
    response_model_by_alias=True
)
@burst_limit
async def add_item(
    request: Request,
    item_data: AddItemRequest,
    user_id: str = Depends(get_current_user_id),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Add a product to the wishlist"""
    logger.info(
        f"Adding item {item_data.product_id} to wishlist for user {user_id} "
        f"(request {_request_id(request)})"
    )
    return await service.add_item(user_id, item_data.product_id, item_data.quantity)

@router.delete("/items/{product_id}", response_model=Wishlist, response_model_by_alias=True)
@burst_limit
async def remove_item(
    request: Request,
    product_id: str,
    user_id: str = Depends(get_current_user_id),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Remove a product from the wishlist"""
    # Same normalization as the request bodies
    product_id = product_id.strip()
    logger.info(
        f"Removing item {product_id} from wishlist for user {user_id} "
        f"(request {_request_id(request)})"
    )
    return await service.remove_item(user_id, product_id)

@router.delete("", response_model=Wishlist, response_model_by_alias=True)
@burst_limit
async def clear_wishlist(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Remove every item from the wishlist"""
    logger.info(f"Clearing wishlist for user {user_id} (request {_request_id(request)})")
    return await service.clear_wishlist(user_id)

@router.post("/addToCart", response_model=MoveToCartResponse, response_model_by_alias=True)
@burst_limit
async def move_to_cart(
    request: Request,
    item_data: AddItemRequest,
    user_id: str = Depends(get_current_user_id),
    service: WishlistService = Depends(get_wishlist_service)
):
    """Move a wishlist item into the cart"""
    logger.info(
        f"Moving item {item_data.product_id} from wishlist to cart for user {user_id} "
        f"(request {_request_id(request)})"
    )
    return await service.move_to_cart(user_id, item_data.product_id, item_data.quantity)
