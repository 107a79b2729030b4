"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .services import (
    get_asset_service,
    get_asset_storage,
    get_catalog_service,
    get_moderation_service,
    get_review_service,
    get_user_service,
    get_wishlist_service,
)

__all__ = [
    "get_asset_service",
    "get_asset_storage",
    "get_catalog_service",
    "get_db_session",
    "get_moderation_service",
    "get_review_service",
    "get_user_service",
    "get_wishlist_service",
]
