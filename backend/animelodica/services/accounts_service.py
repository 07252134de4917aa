"""Accounts service: registration, credentials and session tokens."""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from animelodica.changeset import Changeset, InvalidChangesetError
from animelodica.config import settings
from animelodica.models import User, UserToken
from animelodica.models.user_token import SESSION_CONTEXT
from animelodica.services import user_changesets
from animelodica.services.repositories import (
    DuplicateError,
    UserRepository,
    UserTokenRepository,
)

logger = logging.getLogger(__name__)

Attrs = Mapping[str, Any]


class AccountsService:
    """Operations on user accounts.

    Write operations either return the resulting user or raise
    ``InvalidChangesetError`` carrying the field-keyed errors.
    """

    def __init__(self, db: Session) -> None:
        self.users = UserRepository(db)
        self.tokens = UserTokenRepository(db)

    def get_user_by_identifier(self, identifier: str) -> User | None:
        """Get a user by identifier, ignoring case."""
        return self.users.find_by_identifier(identifier)

    def get_user_by_identifier_and_password(self, identifier: str, password: str) -> User | None:
        """Get a user by identifier and password.

        Returns None for an unknown identifier and for a wrong password alike.
        """
        user = self.users.find_by_identifier(identifier)
        if user_changesets.valid_password(user, password):
            return user
        return None

    def get_user(self, user_id: str) -> User:
        """Get a single user. Raises NotFoundError if the user does not exist."""
        return self.users.get_by_id(user_id)

    def register_user(self, attrs: Attrs) -> User:
        """Register a user."""
        changeset = user_changesets.registration_changeset(
            User(), attrs, identifier_taken=self.users.identifier_taken
        )
        user = self._persist(changeset, "insert")
        logger.info(f"User registered: {user.id}")
        return user

    def change_user_registration(self, user: User, attrs: Attrs | None = None) -> Changeset:
        """Return a changeset for tracking user changes, without hashing or queries."""
        return user_changesets.registration_changeset(user, attrs, hash_password=False)

    def change_user_identifier(self, user: User, attrs: Attrs | None = None) -> Changeset:
        """Return a changeset for changing the user identifier."""
        return user_changesets.identifier_changeset(user, attrs)

    def apply_user_identifier(self, user: User, password: str, attrs: Attrs) -> User:
        """Validate an identifier change and apply it without persisting."""
        return self._identifier_update_changeset(user, password, attrs).apply_action("update")

    def update_user_identifier(self, user: User, password: str, attrs: Attrs) -> User:
        """Validate an identifier change and persist it."""
        changeset = self._identifier_update_changeset(user, password, attrs)
        user = self._persist(changeset, "update")
        logger.info(f"Identifier updated for user: {user.id}")
        return user

    def change_user_password(self, user: User, attrs: Attrs | None = None) -> Changeset:
        """Return a changeset for changing the user password."""
        return user_changesets.password_changeset(user, attrs, hash_password=False)

    def update_user_password(self, user: User, password: str, attrs: Attrs) -> User:
        """Update the user password and revoke every token of the user."""
        changeset = user_changesets.password_changeset(user, attrs)
        user_changesets.validate_current_password(changeset, password)
        changeset.action = "update"
        if not changeset.valid:
            raise InvalidChangesetError(changeset)

        user.hashed_password = changeset.get_change("hashed_password")
        deleted = self.tokens.delete_all_for_user(user.id)
        self.users.save(user)

        logger.info(f"Password updated for user: {user.id}, revoked {deleted} token(s)")
        return user

    def generate_user_session_token(self, user: User) -> bytes:
        """Generate a session token."""
        token, user_token = UserToken.build_session_token(user)
        self.tokens.add(user_token)
        return token

    def get_user_by_session_token(self, token: bytes) -> User | None:
        """Get the owner of a session token, if the token is still valid."""
        return self.tokens.find_user_by_session_token(token, settings.session_validity_days)

    def delete_user_session_token(self, token: bytes) -> None:
        """Delete a session token. Unknown tokens are ignored."""
        self.tokens.delete_by_token(token, SESSION_CONTEXT)

    def _identifier_update_changeset(self, user: User, password: str, attrs: Attrs) -> Changeset:
        changeset = user_changesets.identifier_changeset(
            user,
            attrs,
            identifier_taken=lambda identifier: self.users.identifier_taken(
                identifier, exclude_user_id=user.id
            ),
        )
        return user_changesets.validate_current_password(changeset, password)

    def _persist(self, changeset: Changeset, action: str) -> User:
        """Write a valid changeset, mapping unique index hits onto its errors."""
        changeset.action = action
        if not changeset.valid:
            raise InvalidChangesetError(changeset)

        user = changeset.data
        for field, value in changeset.changes.items():
            setattr(user, field, value)

        try:
            if action == "insert":
                return self.users.add(user)
            return self.users.save(user)
        except DuplicateError as e:
            changeset.add_error(e.field, "has already been taken")
            raise InvalidChangesetError(changeset) from e
