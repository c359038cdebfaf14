"""User schemas."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, StringConstraints, field_validator

from backend_api.core.security import MAX_PASSWORD_BYTES
from backend_api.models.user import UserRole
from backend_api.schemas.base import RequestModel

# Passwords are hashed exactly as sent, surrounding whitespace included
Password = Annotated[str, StringConstraints(strip_whitespace=False)]

# Matches the String(255) name columns
Name = Annotated[str, StringConstraints(max_length=255)]


class UserCreate(RequestModel):
    """User creation payload."""

    email: EmailStr
    password: Password
    first_name: Name | None = None
    last_name: Name | None = None
    role: UserRole = UserRole.USER

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Validate password length.

        Surrounding whitespace does not count towards the minimum, and bcrypt
        only accepts up to 72 bytes.
        """
        if len(v.strip()) < 8:
            raise ValueError("Password must be at least 8 characters long")
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
        return v

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.strip().lower() if isinstance(v, str) else v


class UserUpdate(RequestModel):
    """User update payload. Identity and audit fields are not updatable."""

    first_name: Name | None = None
    last_name: Name | None = None
    role: UserRole | None = None
    is_active: bool | None = None


class UserResponse(BaseModel):
    """Default read projection of a user. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: UserRole
    is_active: bool
    created_at: datetime
    updated_at: datetime
