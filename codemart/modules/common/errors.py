"""Domain error taxonomy shared by every module.

Each error carries the HTTP status and a short machine code so the HTTP layer
can render it without knowing which module raised it.
"""

from __future__ import annotations


class MarketplaceError(Exception):
    """Base class for marketplace domain errors."""

    status_code: int = 500
    code: str = "server_fault"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(MarketplaceError):
    """Raised when a user or asset cannot be found (malformed ids included)."""

    status_code = 404
    code = "not_found"


class ValidationFailedError(MarketplaceError):
    """Raised for missing fields or values outside a closed enum."""

    status_code = 400
    code = "validation_failed"


class UnauthorizedError(MarketplaceError):
    """Raised when credentials are missing or invalid."""

    status_code = 401
    code = "unauthorized"


class ForbiddenError(MarketplaceError):
    """Raised when an authenticated caller lacks the role or ownership."""

    status_code = 403
    code = "forbidden"


class ConflictError(MarketplaceError):
    """Raised when a request contradicts current state (wishlist, duplicates)."""

    status_code = 409
    code = "conflict"
