"""User data access layer."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from animelodica.models import User

from .exceptions import DuplicateError, NotFoundError

logger = logging.getLogger(__name__)


class UserRepository:
    """Centralized user data access.

    Naming conventions:
    - find_* : Query that may return None
    - get_* : Query that raises exception if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, user_id: str) -> User | None:
        """Find user by primary key."""
        return self._db.get(User, user_id)

    def get_by_id(self, user_id: str) -> User:
        """Get user by primary key, raising NotFoundError if missing."""
        user = self.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def find_by_identifier(self, identifier: str) -> User | None:
        """Find user by identifier (case-insensitive)."""
        return (
            self._db.query(User)
            .filter(func.lower(User.identifier) == func.lower(identifier))
            .first()
        )

    def identifier_taken(self, identifier: str, exclude_user_id: str | None = None) -> bool:
        """Check whether another user already holds ``identifier``."""
        query = self._db.query(User.id).filter(
            func.lower(User.identifier) == func.lower(identifier)
        )
        if exclude_user_id is not None:
            query = query.filter(User.id != exclude_user_id)
        return query.first() is not None

    def add(self, user: User) -> User:
        """Insert a new user and commit."""
        self._db.add(user)
        return self._commit(user)

    def save(self, user: User) -> User:
        """Commit pending changes on an existing user."""
        return self._commit(user)

    def _commit(self, user: User) -> User:
        try:
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            logger.info(f"Unique index rejected user write: {e.orig}")
            raise DuplicateError("User", "identifier") from e
        self._db.refresh(user)
        return user
