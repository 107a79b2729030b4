"""Domain models for marketplace users."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from codemart.modules.common.errors import ValidationFailedError


class Role(str, Enum):
    ADMIN = "admin"
    SELLER = "seller"
    BUYER = "buyer"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        try:
            return cls(value)
        except ValueError as exc:
            raise ValidationFailedError("Valid role is required") from exc


@dataclass(slots=True)
class SocialLinks:
    github: str = ""
    twitter: str = ""
    linkedin: str = ""


@dataclass(slots=True)
class User:
    id: str
    name: str
    email: str
    role: Role
    password_hash: str = field(repr=False)
    bio: str = ""
    avatar: str = ""
    website: str = ""
    social: SocialLinks = field(default_factory=SocialLinks)
    is_verified: bool = False
    created_at: Optional[datetime] = None

    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def can_sell(self) -> bool:
        return self.role in {Role.SELLER, Role.ADMIN}


@dataclass(slots=True)
class UserCreateInput:
    name: str
    email: str
    password: str
    role: Role = Role.BUYER


@dataclass(slots=True)
class ProfileUpdateInput:
    """Profile changes; ``None`` or blank values keep the stored value."""

    name: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    website: Optional[str] = None
    github: Optional[str] = None
    twitter: Optional[str] = None
    linkedin: Optional[str] = None
