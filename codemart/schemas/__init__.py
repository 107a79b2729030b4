"""Pydantic schemas used across the project.

Wire payloads use camelCase keys; Python attributes stay snake_case.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from codemart.modules.assets.models import Asset, AssetDetail, AssetReview, Category
from codemart.modules.catalog.models import CatalogPage
from codemart.modules.moderation.models import PlatformStats
from codemart.modules.users.models import Role, User

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=6)
    role: Optional[str] = None


class LoginRequest(CamelModel):
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(..., min_length=1)


class SocialLinksSchema(CamelModel):
    github: str = ""
    twitter: str = ""
    linkedin: str = ""


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    role: Role
    bio: str = ""
    avatar: str = ""
    website: str = ""
    social: SocialLinksSchema = Field(default_factory=SocialLinksSchema)
    is_verified: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls.model_validate(user)


class AuthResponse(CamelModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse


class TokenData(BaseModel):
    user_id: str
    role: str


class ProfileUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = None
    avatar: Optional[str] = None
    website: Optional[str] = None
    github: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None


class RoleUpdateRequest(CamelModel):
    role: Optional[str] = None


class SellerSummaryResponse(CamelModel):
    id: str
    name: str
    avatar: str = ""
    email: Optional[str] = None


class SellerProfileResponse(CamelModel):
    id: str
    name: str
    email: str
    avatar: str = ""
    bio: str = ""
    website: str = ""
    social: SocialLinksSchema = Field(default_factory=SocialLinksSchema)
    is_verified: bool = False


class AssetResponse(CamelModel):
    id: str
    title: str
    description: str
    category: Category
    price: float
    is_free: bool
    seller_id: str
    seller: Optional[SellerSummaryResponse] = None
    file_url: str
    preview_images: list[str] = Field(default_factory=list)
    demo_url: str = ""
    tags: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)
    requirements: str = ""
    version: str = "1.0.0"
    is_approved: bool = False
    is_featured: bool = False
    download_count: int = 0
    rating: float = 0.0
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, asset: Asset) -> "AssetResponse":
        return cls.model_validate(asset)


class ReviewResponse(CamelModel):
    id: str
    asset_id: str
    user: SellerSummaryResponse
    rating: int
    comment: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, review: AssetReview) -> "ReviewResponse":
        return cls.model_validate(review)


class ReviewCreateRequest(CamelModel):
    rating: int
    comment: str = ""


class AssetDetailResponse(AssetResponse):
    seller: SellerProfileResponse  # type: ignore[assignment]
    reviews: list[ReviewResponse] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, detail: AssetDetail) -> "AssetDetailResponse":
        base = AssetResponse.model_validate(detail.asset).model_dump(exclude={"seller"})
        return cls(
            **base,
            seller=SellerProfileResponse.model_validate(detail.seller),
            reviews=[ReviewResponse.from_domain(review) for review in detail.reviews],
        )


class CatalogPageResponse(CamelModel):
    items: list[AssetResponse]
    current_page: int
    total_pages: int
    total_count: int

    @classmethod
    def from_page(cls, page: CatalogPage) -> "CatalogPageResponse":
        return cls(
            items=[AssetResponse.from_domain(item) for item in page.items],
            current_page=page.current_page,
            total_pages=page.total_pages,
            total_count=page.total_count,
        )


class ModerationResponse(CamelModel):
    message: str
    asset: AssetResponse


class DownloadResponse(CamelModel):
    download_url: str


class MessageResponse(CamelModel):
    message: str
    data: Optional[Any] = None


class StatsResponse(CamelModel):
    user_count: int = 0
    asset_count: int = 0
    approved_asset_count: int = 0
    featured_asset_count: int = 0
    users_by_role: dict[str, int] = Field(default_factory=dict)
    assets_by_category: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, stats: PlatformStats) -> "StatsResponse":
        return cls(
            user_count=stats.user_count,
            asset_count=stats.asset_count,
            approved_asset_count=stats.approved_asset_count,
            featured_asset_count=stats.featured_asset_count,
            users_by_role={role.value: count for role, count in stats.users_by_role.items()},
            assets_by_category={category.value: count for category, count in stats.assets_by_category.items()},
        )


class ErrorResponse(BaseModel):
    message: str
    code: str


__all__ = [
    "AssetDetailResponse",
    "AssetResponse",
    "AuthResponse",
    "CamelModel",
    "CatalogPageResponse",
    "DownloadResponse",
    "ErrorResponse",
    "LoginRequest",
    "MessageResponse",
    "ModerationResponse",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "ReviewCreateRequest",
    "ReviewResponse",
    "RoleUpdateRequest",
    "SellerProfileResponse",
    "SellerSummaryResponse",
    "SocialLinksSchema",
    "StatsResponse",
    "TokenData",
    "UserResponse",
]
