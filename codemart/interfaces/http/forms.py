"""Parsing of multipart form values sent by the upload forms."""

from __future__ import annotations

from typing import Optional

from codemart.modules.assets.models import AssetCreateInput, AssetUpdateInput, Category, split_csv
from codemart.modules.common.errors import ValidationFailedError


def parse_flag(value: Optional[str]) -> Optional[bool]:
    """``"true"``/``"false"`` map to booleans; anything else is unset."""
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None


def parse_price(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    try:
        price = float(value)
    except ValueError as exc:
        raise ValidationFailedError("Price must be a number") from exc
    if price != price or price < 0:
        raise ValidationFailedError("Price cannot be negative")
    return price


def build_create_input(
    *,
    title: Optional[str],
    description: Optional[str],
    category: Optional[str],
    price: Optional[str],
    is_free: Optional[str],
    demo_url: Optional[str],
    tags: Optional[str],
    features: Optional[str],
    technologies: Optional[str],
    requirements: Optional[str],
) -> AssetCreateInput:
    if not title or not title.strip():
        raise ValidationFailedError("Title is required")
    if not description or not description.strip():
        raise ValidationFailedError("Description is required")
    free = parse_flag(is_free) is True
    return AssetCreateInput(
        title=title,
        description=description,
        category=Category.parse(category),
        price=0.0 if free else (parse_price(price) or 0.0),
        is_free=free,
        demo_url=demo_url or "",
        tags=split_csv(tags),
        features=split_csv(features),
        technologies=split_csv(technologies),
        requirements=requirements or "",
    )


def build_update_input(
    *,
    title: Optional[str],
    description: Optional[str],
    category: Optional[str],
    price: Optional[str],
    is_free: Optional[str],
    demo_url: Optional[str],
    tags: Optional[str],
    features: Optional[str],
    technologies: Optional[str],
    requirements: Optional[str],
) -> AssetUpdateInput:
    return AssetUpdateInput(
        title=title or None,
        description=description or None,
        category=Category.parse(category) if category and category.strip() else None,
        price=parse_price(price),
        is_free=parse_flag(is_free),
        demo_url=demo_url or None,
        tags=split_csv(tags) or None,
        features=split_csv(features) or None,
        technologies=split_csv(technologies) or None,
        requirements=requirements or None,
    )
