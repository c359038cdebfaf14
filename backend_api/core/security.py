"""Security utilities for password hashing."""

from bcrypt import gensalt, hashpw

# bcrypt refuses longer inputs
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash, at most 72 bytes as UTF-8

    Returns:
        Hashed password as a string

    Example:
        ```python
        from backend_api.core.security import hash_password

        hashed = hash_password("my_password")
        ```
    """
    return hashpw(password.encode("utf-8"), gensalt()).decode("utf-8")
