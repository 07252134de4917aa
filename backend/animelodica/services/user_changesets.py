"""Changesets for creating and updating users."""

from collections.abc import Callable, Mapping
from typing import Any

from animelodica.changeset import Changeset
from animelodica.models.user import User
from animelodica.services.auth_service import AuthService

IDENTIFIER_MAX_LENGTH = 160
PASSWORD_MIN_LENGTH = 12
# bcrypt only looks at the first 72 bytes
PASSWORD_MAX_LENGTH = 72

IdentifierTaken = Callable[[str], bool]


def registration_changeset(
    user: User,
    attrs: Mapping[str, Any] | None,
    hash_password: bool = True,
    identifier_taken: IdentifierTaken | None = None,
) -> Changeset:
    """A user changeset for registration.

    Args:
        user: The user being registered (usually a fresh ``User()``).
        attrs: Raw params, e.g. from a request body.
        hash_password: Hash the password and drop the raw value. Disable it
            when the changeset is only used to validate a form.
        identifier_taken: Callback checking uniqueness against storage.
            ``None`` skips the query; the database index still applies.
    """
    changeset = Changeset.cast(user, attrs, ["identifier", "password"])
    _validate_identifier(changeset, identifier_taken)
    return _validate_password(changeset, hash_password)


def identifier_changeset(
    user: User,
    attrs: Mapping[str, Any] | None,
    identifier_taken: IdentifierTaken | None = None,
) -> Changeset:
    """A user changeset for changing the identifier.

    Requires the identifier to change, otherwise an error is added.
    """
    changeset = Changeset.cast(user, attrs, ["identifier"])
    _validate_identifier(changeset, identifier_taken)
    if "identifier" not in changeset.changes and "identifier" not in changeset.errors:
        changeset.add_error("identifier", "did not change")
    return changeset


def password_changeset(
    user: User, attrs: Mapping[str, Any] | None, hash_password: bool = True
) -> Changeset:
    """A user changeset for changing the password."""
    changeset = Changeset.cast(user, attrs, ["password"])
    changeset.validate_confirmation("password", message="does not match password")
    return _validate_password(changeset, hash_password)


def validate_current_password(changeset: Changeset, password: str | None) -> Changeset:
    """Add an error on ``current_password`` unless it matches the stored hash."""
    if not valid_password(changeset.data, password):
        changeset.add_error("current_password", "is not valid")
    return changeset


def valid_password(user: User | None, password: str | None) -> bool:
    """Verify ``password`` for ``user``.

    Burns a dummy check when there is nothing to compare against, so callers
    can't tell a missing user from a wrong password by timing.
    """
    if user is not None and user.hashed_password and password:
        return AuthService.verify_password(password, user.hashed_password)
    return AuthService.no_user_verify()


def _validate_identifier(
    changeset: Changeset, identifier_taken: IdentifierTaken | None
) -> Changeset:
    changeset.validate_required(["identifier"])
    changeset.validate_format("identifier", r"\A[^\s]+\Z", message="must have no spaces")
    changeset.validate_length("identifier", max=IDENTIFIER_MAX_LENGTH)
    if identifier_taken is not None:
        changeset.unsafe_validate_unique("identifier", identifier_taken)
    return changeset


def _validate_password(changeset: Changeset, hash_password: bool) -> Changeset:
    changeset.validate_required(["password"])
    changeset.validate_length(
        "password", min=PASSWORD_MIN_LENGTH, max=PASSWORD_MAX_LENGTH
    )
    return _maybe_hash_password(changeset, hash_password)


def _maybe_hash_password(changeset: Changeset, hash_password: bool) -> Changeset:
    password = changeset.get_change("password")
    if not (hash_password and password and changeset.valid):
        return changeset

    changeset.validate_length("password", max=PASSWORD_MAX_LENGTH, count="bytes")
    if changeset.valid:
        changeset.put_change("hashed_password", AuthService.hash_password(password))
        changeset.delete_change("password")
    return changeset
