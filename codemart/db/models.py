"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from codemart.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="buyer")
    bio = Column(Text, nullable=False, default="")
    avatar = Column(String(500), nullable=False, default="")
    website = Column(String(500), nullable=False, default="")
    github = Column(String(255), nullable=False, default="")
    twitter = Column(String(255), nullable=False, default="")
    linkedin = Column(String(255), nullable=False, default="")
    is_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    assets = relationship("Asset", back_populates="seller")
    wishlist_items = relationship(
        "WishlistItem",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="WishlistItem.id",
    )


class Asset(Base):
    __tablename__ = "assets"

    # integer key doubles as the creation sequence used to break sort ties
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(30), nullable=False, index=True)
    price = Column(Float, nullable=False, default=0)
    is_free = Column(Boolean, nullable=False, default=False)
    seller_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    file_url = Column(String(500), nullable=False)
    preview_images = Column(JSON, nullable=False, default=list)
    demo_url = Column(String(500), nullable=False, default="")
    features = Column(JSON, nullable=False, default=list)
    technologies = Column(JSON, nullable=False, default=list)
    requirements = Column(Text, nullable=False, default="")
    version = Column(String(20), nullable=False, default="1.0.0")
    is_approved = Column(Boolean, nullable=False, default=False, index=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    download_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    seller = relationship("User", back_populates="assets", lazy="joined")
    tag_rows = relationship(
        "AssetTag",
        back_populates="asset",
        cascade="all, delete-orphan",
        order_by="AssetTag.position",
        lazy="selectin",
    )
    reviews = relationship("Review", back_populates="asset", cascade="all, delete-orphan")


class AssetTag(Base):
    __tablename__ = "asset_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    asset_id = Column(Integer, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    value = Column(String(100), nullable=False)

    asset = relationship("Asset", back_populates="tag_rows")


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (UniqueConstraint("asset_id", "user_id", name="uq_reviews_asset_user"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    asset_id = Column(Integer, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    asset = relationship("Asset", back_populates="reviews")
    user = relationship("User", lazy="joined")


class WishlistItem(Base):
    __tablename__ = "wishlist_items"
    __table_args__ = (UniqueConstraint("user_id", "asset_id", name="uq_wishlist_user_asset"),)

    # autoincrement id preserves insertion order for display
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    asset_id = Column(Integer, ForeignKey("assets.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="wishlist_items")
    asset = relationship("Asset")
