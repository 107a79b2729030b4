"""SQLAlchemy-backed repository implementations."""

from .asset_repository import SqlAssetRepository
from .review_repository import SqlReviewRepository
from .user_repository import SqlUserRepository
from .wishlist_repository import SqlWishlistRepository

__all__ = [
    "SqlAssetRepository",
    "SqlReviewRepository",
    "SqlUserRepository",
    "SqlWishlistRepository",
]
