"""
Wishlist store
Persistence accessor for wishlist documents, scoped by user id
"""

from typing import Optional
from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select
import logging

from app.models.wishlist import Wishlist as WishlistModel
from app.schemas.wishlist import Wishlist, WishlistItem, utcnow

logger = logging.getLogger(__name__)

def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

class WishlistStore:
    """
    Thin CRUD layer over the ``wishlists`` table.

    Rows are converted to and from the ``Wishlist`` schema so callers never
    hold ORM instances; ``save`` is an upsert that replaces the whole item list.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_user(self, user_id: str) -> Optional[Wishlist]:
        row = await self._get_row(user_id)
        if row is None:
            return None
        return self._to_schema(row)

    def create(self, user_id: str) -> Wishlist:
        """Build an empty wishlist; nothing is written until ``save``"""
        now = utcnow()
        return Wishlist(user_id=user_id, items=[], created_at=now, updated_at=now)

    async def save(self, wishlist: Wishlist) -> Wishlist:
        """
        Insert the wishlist if the user has none, otherwise replace it

        Returns:
            The wishlist as persisted
        """
        items = [item.to_wire() for item in wishlist.items]
        row = await self._get_row(wishlist.user_id)

        if row is None:
            row = WishlistModel(
                user_id=wishlist.user_id,
                items=items,
                created_at=wishlist.created_at,
                updated_at=wishlist.updated_at,
            )
            self.db.add(row)
            try:
                await self.db.commit()
            except IntegrityError:
                # Another request created the row first; fall back to replace
                await self.db.rollback()
                logger.warning(f"Concurrent wishlist creation for user {wishlist.user_id}, replacing")
                row = await self._get_row(wishlist.user_id)
                if row is None:
                    raise
                self._replace(row, items, wishlist)
                await self.db.commit()
        else:
            self._replace(row, items, wishlist)
            await self.db.commit()

        await self.db.refresh(row)
        return self._to_schema(row)

    async def _get_row(self, user_id: str) -> Optional[WishlistModel]:
        # Overwrite any copy already in the identity map with the committed row
        result = await self.db.execute(
            select(WishlistModel)
            .where(WishlistModel.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _replace(row: WishlistModel, items: list, wishlist: Wishlist) -> None:
        # Assign a new list so the JSON column is flagged as modified
        row.items = list(items)
        row.updated_at = wishlist.updated_at

    @staticmethod
    def _to_schema(row: WishlistModel) -> Wishlist:
        return Wishlist(
            user_id=row.user_id,
            items=[WishlistItem.model_validate(item) for item in (row.items or [])],
            created_at=_aware(row.created_at),
            updated_at=_aware(row.updated_at),
        )
