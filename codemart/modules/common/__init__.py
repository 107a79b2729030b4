"""Shared abstractions used across domain modules."""

from .errors import (
    ConflictError,
    ForbiddenError,
    MarketplaceError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)

__all__ = [
    "ConflictError",
    "ForbiddenError",
    "MarketplaceError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationFailedError",
]
