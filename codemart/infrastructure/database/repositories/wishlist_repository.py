"""SQLAlchemy repository for wishlist membership."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from codemart.db.models import Asset as AssetModel
from codemart.db.models import WishlistItem as WishlistItemModel
from codemart.modules.assets.models import Asset
from codemart.infrastructure.database.repositories.asset_repository import asset_from_model, parse_asset_id


class SqlWishlistRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def contains(self, user_id: str, asset_id: str) -> bool:
        key = parse_asset_id(asset_id)
        if key is None:
            return False
        stmt = select(WishlistItemModel.id).where(
            WishlistItemModel.user_id == user_id,
            WishlistItemModel.asset_id == key,
        )
        return (await self._session.execute(stmt)).first() is not None

    async def add(self, user_id: str, asset_id: str) -> None:
        self._session.add(WishlistItemModel(user_id=user_id, asset_id=parse_asset_id(asset_id)))
        await self._session.flush()

    async def remove(self, user_id: str, asset_id: str) -> bool:
        key = parse_asset_id(asset_id)
        if key is None:
            return False
        stmt = delete(WishlistItemModel).where(
            WishlistItemModel.user_id == user_id,
            WishlistItemModel.asset_id == key,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def list_assets(self, user_id: str) -> list[Asset]:
        """Wishlisted assets in insertion order, seller joined at read time."""
        stmt = (
            select(AssetModel)
            .join(WishlistItemModel, WishlistItemModel.asset_id == AssetModel.id)
            .where(WishlistItemModel.user_id == user_id)
            .order_by(WishlistItemModel.id.asc())
        )
        result = await self._session.execute(stmt)
        return [asset_from_model(model) for model in result.scalars().all()]
