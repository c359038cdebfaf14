"""Users feature: the repository that owns access to ``users`` storage."""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, undefer

from backend_api.core.security import hash_password
from backend_api.models.user import User, UserRole
from backend_api.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserError(Exception):
    """Base exception for user operations."""

    pass


class EmailAlreadyRegisteredError(UserError):
    """Raised when a user is created with an email that is already taken."""

    def __init__(self, email: str):
        super().__init__(f"Email already registered: {email}")
        self.email = email


class UserNotFoundError(UserError):
    """Raised when a user id does not match any record."""

    def __init__(self, user_id: UUID):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class UserRepository:
    """Create, read, update and query operations over ``User`` records."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, user_data: UserCreate) -> User:
        """Create a new user.

        Args:
            user_data: Validated creation payload; the password is hashed here

        Returns:
            User: The persisted user, without its password hash loaded

        Raises:
            EmailAlreadyRegisteredError: If the email is already in use
        """
        new_user = User(
            email=user_data.email,
            password_hash=hash_password(user_data.password),
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            role=user_data.role,
        )

        self.db.add(new_user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # Only the email uniqueness violation is a client error
            if self.get_by_email(user_data.email) is not None:
                raise EmailAlreadyRegisteredError(user_data.email) from e
            raise

        # Drop the in-memory hash so reads go through the default projection
        self.db.expire(new_user)
        logger.info(f"Created user {new_user.id} with role {new_user.role.value}")
        return new_user

    def get(self, user_id: UUID) -> User | None:
        """Get a user by id, without the password hash."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str, include_password: bool = False) -> User | None:
        """Get a user by email.

        Args:
            email: Email address to look up (case-insensitive)
            include_password: Also load ``password_hash`` in the same query

        Returns:
            The matching user, or None
        """
        query = self.db.query(User).filter(User.email == email.strip().lower())
        if include_password:
            query = query.options(undefer(User.password_hash))
        return query.first()

    def list_users(
        self,
        offset: int = 0,
        limit: int = 100,
        role: UserRole | None = None,
        is_active: bool | None = None,
    ) -> list[User]:
        """List users ordered by creation time, optionally filtered."""
        query = self.db.query(User)
        if role is not None:
            query = query.filter(User.role == role)
        if is_active is not None:
            query = query.filter(User.is_active == is_active)
        return query.order_by(User.created_at, User.id).offset(offset).limit(limit).all()

    def update(self, user_id: UUID, user_data: UserUpdate) -> User:
        """Apply the explicitly set fields of ``user_data`` to a user.

        Raises:
            UserNotFoundError: If no user has the given id
        """
        user = self.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        changes = user_data.model_dump(exclude_unset=True)
        # role and is_active are not nullable; an explicit null leaves them as is
        for field in ("role", "is_active"):
            if field in changes and changes[field] is None:
                del changes[field]
        if not changes:
            return user

        for field, value in changes.items():
            setattr(user, field, value)

        self.db.commit()
        self.db.refresh(user)
        logger.info(f"Updated user {user.id}: {', '.join(sorted(changes))}")
        return user
