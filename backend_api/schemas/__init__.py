"""Pydantic schemas package."""

from backend_api.schemas.base import RequestModel
from backend_api.schemas.user import UserCreate, UserResponse, UserUpdate

__all__ = [
    "RequestModel",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
]
