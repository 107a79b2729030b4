"""Moderation exports."""

from .models import ModerationResult, PlatformStats
from .service import ModerationService

__all__ = ["ModerationResult", "ModerationService", "PlatformStats"]
