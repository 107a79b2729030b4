"""Asset domain exports."""

from .models import (
    Asset,
    AssetCreateInput,
    AssetDetail,
    AssetReview,
    AssetUpdateInput,
    Category,
    ModerationState,
    SellerProfile,
    SellerSummary,
    split_csv,
)
from .service import AssetService
from .storage import AssetFileStorage

__all__ = [
    "Asset",
    "AssetCreateInput",
    "AssetDetail",
    "AssetFileStorage",
    "AssetReview",
    "AssetService",
    "AssetUpdateInput",
    "Category",
    "ModerationState",
    "SellerProfile",
    "SellerSummary",
    "split_csv",
]
