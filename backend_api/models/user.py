"""User model."""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, String, Uuid, event
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import deferred

from backend_api.database import Base


class UserRole(str, Enum):
    """Access tiers a user can hold."""

    USER = "user"  # Standard access
    ADMIN = "admin"  # Can see dashboard
    SUPER_ADMIN = "super_admin"  # Can delete other admins


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User model for authentication and authorization."""

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    email = Column(String(255), unique=True, index=True, nullable=False)
    # Not part of the default SELECT; load with undefer(User.password_hash)
    password_hash = deferred(Column(String(255), nullable=False))
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    role = Column(
        SAEnum(
            UserRole,
            name="user_role",
            values_callable=lambda roles: [role.value for role in roles],
            create_constraint=True,
            validate_strings=True,
        ),
        default=UserRole.USER,
        nullable=False,
    )
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of User."""
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"


@event.listens_for(User, "before_insert")
def _stamp_new_user(mapper, connection, target: User) -> None:
    """Give a new row one timestamp for both created_at and updated_at."""
    if target.created_at is None:
        target.created_at = _utcnow()
    if target.updated_at is None:
        target.updated_at = target.created_at
