"""
Common dependencies for FastAPI
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import UnauthorizedException
from app.services.context import ServiceContext
from app.services.wishlist_service import WishlistService
from app.services.wishlist_store import WishlistStore

def get_current_user_id(request: Request) -> str:
    """
    Get the authenticated user id forwarded by the gateway

    Raises:
        UnauthorizedException: Header missing or blank
    """
    user_id = request.headers.get(settings.USER_ID_HEADER, "").strip()
    if not user_id:
        raise UnauthorizedException("User not authenticated")
    request.state.user_id = user_id
    return user_id

def get_service_context(request: Request) -> ServiceContext:
    """Process-wide context created at startup"""
    return request.app.state.context

def get_wishlist_service(
    context: ServiceContext = Depends(get_service_context),
    db: AsyncSession = Depends(get_db)
) -> WishlistService:
    """Wishlist service bound to this request's database session"""
    return WishlistService(context, WishlistStore(db))
