"""Domain models for marketplace assets."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from codemart.modules.common.errors import ValidationFailedError
from codemart.modules.users.models import SocialLinks


class Category(str, Enum):
    UI_KITS = "ui-kits"
    TEMPLATES = "templates"
    MINI_PROJECTS = "mini-projects"
    UTILITIES = "utilities"
    API_COLLECTIONS = "api-collections"
    SNIPPETS = "snippets"
    PROJECT_STARTERS = "project-starters"

    @classmethod
    def parse(cls, value: str | None) -> "Category":
        try:
            return cls(value)
        except ValueError as exc:
            raise ValidationFailedError("Category is required") from exc

    @classmethod
    def lookup(cls, value: str) -> Optional["Category"]:
        """Return the member for ``value`` or ``None`` when unrecognized."""
        try:
            return cls(value)
        except ValueError:
            return None


class ModerationState(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    FEATURED = "featured"


@dataclass(slots=True)
class SellerSummary:
    id: str
    name: str
    avatar: str = ""
    email: Optional[str] = None


@dataclass(slots=True)
class SellerProfile:
    id: str
    name: str
    email: str
    avatar: str
    bio: str
    website: str
    social: SocialLinks
    is_verified: bool


@dataclass(slots=True)
class Asset:
    id: str
    title: str
    description: str
    category: Category
    price: float
    is_free: bool
    seller_id: str
    file_url: str
    preview_images: list[str] = field(default_factory=list)
    demo_url: str = ""
    tags: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    technologies: list[str] = field(default_factory=list)
    requirements: str = ""
    version: str = "1.0.0"
    is_approved: bool = False
    is_featured: bool = False
    download_count: int = 0
    created_at: Optional[datetime] = None
    seller: Optional[SellerSummary] = None
    rating: float = 0.0

    @property
    def moderation_state(self) -> ModerationState:
        if not self.is_approved:
            return ModerationState.PENDING
        if self.is_featured:
            return ModerationState.FEATURED
        return ModerationState.APPROVED


@dataclass(slots=True)
class AssetReview:
    id: str
    asset_id: str
    user: SellerSummary
    rating: int
    comment: str
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class AssetDetail:
    """Single-asset view joined with the seller profile and reviews."""

    asset: Asset
    seller: SellerProfile
    reviews: list[AssetReview] = field(default_factory=list)


@dataclass(slots=True)
class AssetCreateInput:
    title: str
    description: str
    category: Category
    price: float = 0.0
    is_free: bool = False
    demo_url: str = ""
    tags: list[str] = field(default_factory=list)
    features: list[str] = field(default_factory=list)
    technologies: list[str] = field(default_factory=list)
    requirements: str = ""


@dataclass(slots=True)
class AssetUpdateInput:
    """Partial update; ``None`` keeps the stored value."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[Category] = None
    price: Optional[float] = None
    is_free: Optional[bool] = None
    demo_url: Optional[str] = None
    tags: Optional[list[str]] = None
    features: Optional[list[str]] = None
    technologies: Optional[list[str]] = None
    requirements: Optional[str] = None


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated form value into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
