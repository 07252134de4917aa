"""Repository-specific exceptions.

Raised by the account repositories instead of leaking SQLAlchemy errors,
so services can map them onto changeset errors or 404 responses.
"""


class RepositoryError(Exception):
    """Base exception for repository operations."""


class NotFoundError(RepositoryError):
    """Entity not found in database."""

    def __init__(self, entity_type: str, entity_id: str | int):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} not found: {entity_id}")


class DuplicateError(RepositoryError):
    """A write hit a unique index."""

    def __init__(self, entity_type: str, field: str):
        self.entity_type = entity_type
        self.field = field
        super().__init__(f"{entity_type} {field} is already taken")
