"""User domain exports."""

from .models import ProfileUpdateInput, Role, SocialLinks, User, UserCreateInput
from .service import UserService

__all__ = [
    "ProfileUpdateInput",
    "Role",
    "SocialLinks",
    "User",
    "UserCreateInput",
    "UserService",
]
