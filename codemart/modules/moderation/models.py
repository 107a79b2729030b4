"""Result types returned by moderation use cases."""

from __future__ import annotations

from dataclasses import dataclass, field

from codemart.modules.assets.models import Asset, Category
from codemart.modules.users.models import Role


@dataclass(slots=True)
class ModerationResult:
    message: str
    asset: Asset


@dataclass(slots=True)
class PlatformStats:
    user_count: int = 0
    asset_count: int = 0
    approved_asset_count: int = 0
    featured_asset_count: int = 0
    users_by_role: dict[Role, int] = field(default_factory=dict)
    assets_by_category: dict[Category, int] = field(default_factory=dict)
