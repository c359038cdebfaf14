"""Database models package."""

from backend_api.models.user import User, UserRole

__all__ = ["User", "UserRole"]
