"""Services layer - account business logic.

- auth_service: password hashing and remember-me cookie signing
- user_changesets: validation of user registration and settings changes
- accounts_service: the accounts operations used by the routers
- user_auth: logging users in and out of the HTTP session
- repositories/: Data access layer

Common imports for convenience:
    from animelodica.services import AccountsService, AuthService
"""

from animelodica.services.accounts_service import AccountsService
from animelodica.services.auth_service import AuthService
from animelodica.services.repositories import (
    DuplicateError,
    NotFoundError,
    RepositoryError,
)

__all__ = [
    "AccountsService",
    "AuthService",
    "DuplicateError",
    "NotFoundError",
    "RepositoryError",
]
