"""Service providers bound to the request's database session."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from codemart.modules.assets import AssetFileStorage, AssetService
from codemart.modules.catalog import CatalogService
from codemart.modules.moderation import ModerationService
from codemart.modules.reviews import ReviewService
from codemart.modules.users import UserService
from codemart.modules.wishlist import WishlistService

from .database import get_db_session


@lru_cache()
def get_asset_storage() -> AssetFileStorage:
    return AssetFileStorage.from_settings()


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    return UserService.with_session(db)


def get_asset_service(
    db: AsyncSession = Depends(get_db_session),
    storage: AssetFileStorage = Depends(get_asset_storage),
) -> AssetService:
    return AssetService.with_session(db, storage)


def get_catalog_service(db: AsyncSession = Depends(get_db_session)) -> CatalogService:
    return CatalogService.with_session(db)


def get_moderation_service(db: AsyncSession = Depends(get_db_session)) -> ModerationService:
    return ModerationService.with_session(db)


def get_wishlist_service(db: AsyncSession = Depends(get_db_session)) -> WishlistService:
    return WishlistService.with_session(db)


def get_review_service(db: AsyncSession = Depends(get_db_session)) -> ReviewService:
    return ReviewService.with_session(db)
