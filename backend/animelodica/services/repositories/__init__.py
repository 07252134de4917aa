"""Repository layer - data access abstraction.

Repositories handle all database queries, providing a clean interface
for services. Services should use repositories for data access rather
than directly querying SQLAlchemy models.

Dependency direction: Services -> Repositories -> Models
"""

from .exceptions import DuplicateError, NotFoundError, RepositoryError
from .user_repository import UserRepository
from .user_token_repository import UserTokenRepository

__all__ = [
    "DuplicateError",
    "NotFoundError",
    "RepositoryError",
    "UserRepository",
    "UserTokenRepository",
]
