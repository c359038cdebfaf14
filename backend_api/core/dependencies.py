"""FastAPI dependencies shared across routers."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from backend_api.core.users import UserRepository
from backend_api.database import get_db


def get_user_repository(
    db: Annotated[Session, Depends(get_db)],
) -> UserRepository:
    """Get the user repository bound to the request's database session."""
    return UserRepository(db)
