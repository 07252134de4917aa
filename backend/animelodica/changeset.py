"""Changesets: validated, diffable proposals to mutate an entity.

A changeset is built by casting user-supplied params against an entity,
then piped through validators that record field-keyed error messages.
Persisting a valid changeset is left to the repositories; applying it
without persisting is done with ``apply_changes`` / ``apply_action``.

Example:
    changeset = (
        Changeset.cast(user, {"identifier": "new"}, ["identifier"])
        .validate_required(["identifier"])
        .validate_length("identifier", max=160)
    )
    if not changeset.valid:
        print(changeset.errors)
"""

import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from sqlalchemy import inspect


class InvalidChangesetError(Exception):
    """Raised when an invalid changeset is applied or persisted."""

    def __init__(self, changeset: "Changeset"):
        self.changeset = changeset
        super().__init__(f"Invalid changeset: {changeset.errors}")

    @property
    def errors(self) -> dict[str, list[str]]:
        return self.changeset.errors


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


class Changeset:
    """Proposed changes to ``data`` plus the validation errors found so far."""

    def __init__(
        self,
        data: Any,
        changes: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> None:
        self.data = data
        self.changes: dict[str, Any] = changes or {}
        self.params: dict[str, Any] = params or {}
        self.errors: dict[str, list[str]] = {}
        self.required: list[str] = []
        self.action: str | None = None

    @classmethod
    def cast(
        cls, data: Any, params: Mapping[str, Any] | None, permitted: Iterable[str]
    ) -> "Changeset":
        """Build a changeset from ``params``, keeping only ``permitted`` keys.

        Blank strings count as ``None``. A value is recorded as a change only
        when it differs from the current value on ``data``.
        """
        params = {str(key): value for key, value in (params or {}).items()}
        changeset = cls(data, params=params)

        for field in permitted:
            if field not in params:
                continue
            value = params[field]
            if _is_blank(value):
                value = None
            elif not isinstance(value, str):
                changeset.add_error(field, "is invalid")
                continue
            if value != getattr(data, field, None):
                changeset.changes[field] = value

        return changeset

    @property
    def valid(self) -> bool:
        return not self.errors

    def get_change(self, field: str, default: Any = None) -> Any:
        return self.changes.get(field, default)

    def get_field(self, field: str) -> Any:
        """Return the changed value, falling back to the value on ``data``."""
        if field in self.changes:
            return self.changes[field]
        return getattr(self.data, field, None)

    def put_change(self, field: str, value: Any) -> "Changeset":
        self.changes[field] = value
        return self

    def delete_change(self, field: str) -> "Changeset":
        self.changes.pop(field, None)
        return self

    def add_error(self, field: str, message: str) -> "Changeset":
        self.errors.setdefault(field, []).append(message)
        return self

    def validate_required(self, fields: Iterable[str]) -> "Changeset":
        for field in fields:
            if field not in self.required:
                self.required.append(field)
            if field not in self.errors and _is_blank(self.get_field(field)):
                self.add_error(field, "can't be blank")
        return self

    def validate_length(
        self,
        field: str,
        min: int | None = None,
        max: int | None = None,
        count: str = "codepoints",
    ) -> "Changeset":
        """Check the length of a changed string value.

        ``count`` is either ``"codepoints"`` or ``"bytes"`` (UTF-8).
        """
        value = self.changes.get(field)
        if value is None:
            return self

        if count == "bytes":
            length, unit = len(value.encode("utf-8")), "byte(s)"
        else:
            length, unit = len(value), "character(s)"

        if min is not None and length < min:
            self.add_error(field, f"should be at least {min} {unit}")
        elif max is not None and length > max:
            self.add_error(field, f"should be at most {max} {unit}")
        return self

    def validate_format(
        self, field: str, pattern: str | re.Pattern, message: str = "has invalid format"
    ) -> "Changeset":
        value = self.changes.get(field)
        if value is not None and not re.search(pattern, value):
            self.add_error(field, message)
        return self

    def validate_confirmation(
        self,
        field: str,
        message: str = "does not match confirmation",
        required: bool = False,
    ) -> "Changeset":
        """Compare a changed value with its ``<field>_confirmation`` param."""
        if field not in self.changes:
            return self

        confirmation_field = f"{field}_confirmation"
        confirmation = self.params.get(confirmation_field)
        if confirmation is None:
            if required:
                self.add_error(confirmation_field, "can't be blank")
        elif confirmation != self.changes[field]:
            self.add_error(confirmation_field, message)
        return self

    def unsafe_validate_unique(
        self,
        field: str,
        is_taken: Callable[[Any], bool],
        message: str = "has already been taken",
    ) -> "Changeset":
        """Query for an existing value before insert.

        Not a substitute for a unique index: two concurrent writers can both
        pass this check.
        """
        if field in self.errors or field not in self.changes:
            return self
        if is_taken(self.changes[field]):
            self.add_error(field, message)
        return self

    def apply_changes(self) -> Any:
        """Return a detached copy of ``data`` with the changes applied."""
        model = type(self.data)
        values = {
            attr.key: getattr(self.data, attr.key) for attr in inspect(model).column_attrs
        }
        applied = model(**values)
        for field, value in self.changes.items():
            setattr(applied, field, value)
        return applied

    def apply_action(self, action: str) -> Any:
        """Like ``apply_changes`` but raise when the changeset is invalid."""
        self.action = action
        if not self.valid:
            raise InvalidChangesetError(self)
        return self.apply_changes()

    def __repr__(self) -> str:
        # Raw values can hold passwords, only field names are shown
        return (
            f"<Changeset(action={self.action!r}, changes={sorted(self.changes)}, "
            f"errors={self.errors}, valid={self.valid})>"
        )
