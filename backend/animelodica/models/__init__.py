"""SQLAlchemy ORM models."""

from animelodica.models.user import User
from animelodica.models.user_token import UserToken

__all__ = [
    "User",
    "UserToken",
]
