"""User token data access layer."""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from animelodica.models import User, UserToken
from animelodica.models.user_token import SESSION_CONTEXT

logger = logging.getLogger(__name__)


class UserTokenRepository:
    """Token storage and lookup.

    Tokens are looked up by raw value and context; liveness is a comparison
    of ``inserted_at`` against a cutoff computed from the validity window.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def add(self, user_token: UserToken) -> UserToken:
        """Insert a token and commit."""
        self._db.add(user_token)
        self._db.commit()
        return user_token

    def find_user_by_session_token(self, token: bytes, validity_days: int) -> User | None:
        """Find the owner of a live session token."""
        if not isinstance(token, bytes):
            return None
        cutoff = datetime.now(UTC) - timedelta(days=validity_days)
        return (
            self._db.query(User)
            .join(UserToken, UserToken.user_id == User.id)
            .filter(
                UserToken.token == token,
                UserToken.context == SESSION_CONTEXT,
                UserToken.inserted_at > cutoff,
            )
            .first()
        )

    def delete_by_token(self, token: bytes, context: str) -> int:
        """Delete the token with this value and context. Returns rows deleted."""
        deleted = (
            self._db.query(UserToken)
            .filter(UserToken.token == token, UserToken.context == context)
            .delete(synchronize_session=False)
        )
        self._db.commit()
        return deleted

    def delete_all_for_user(self, user_id: str) -> int:
        """Delete every token of a user.

        Does not commit, so it can join the caller's transaction.
        """
        return (
            self._db.query(UserToken)
            .filter(UserToken.user_id == user_id)
            .delete(synchronize_session=False)
        )
