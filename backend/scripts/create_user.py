"""Create a user account from the command line.

Usage:
    python scripts/create_user.py <identifier> [--password PASSWORD]

The password falls back to the ANIMELODICA_USER_PASSWORD environment
variable and is generated when neither is given.
"""

import argparse
import logging
import os
import secrets
import sys

from sqlalchemy.orm import Session as DBSession

from animelodica.changeset import InvalidChangesetError
from animelodica.models.user import User
from animelodica.services.accounts_service import AccountsService

logger = logging.getLogger(__name__)

PASSWORD_ENV_VAR = "ANIMELODICA_USER_PASSWORD"


def generate_secure_password() -> str:
    """Generate a password that satisfies the registration rules."""
    return secrets.token_urlsafe(24)


def create_user(db: DBSession, identifier: str, password: str | None = None) -> tuple[User, str]:
    """
    Register a user.

    Args:
        db: Database session
        identifier: Login identifier for the new user
        password: Optional password. If not provided, generates a secure one.

    Returns:
        Tuple of (User, password_used)

    Raises:
        InvalidChangesetError: If the identifier or password is rejected.
    """
    password = password or os.getenv(PASSWORD_ENV_VAR) or generate_secure_password()
    user = AccountsService(db).register_user({"identifier": identifier, "password": password})
    logger.info("Created user: %s (id: %s)", user.identifier, user.id)
    return user, password


def main(argv: list[str] | None = None, db: DBSession | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a user account")
    parser.add_argument("identifier", help="login identifier, no whitespace")
    parser.add_argument("--password", help=f"defaults to ${PASSWORD_ENV_VAR} or a generated one")
    args = parser.parse_args(argv)

    owns_session = db is None
    if owns_session:
        from animelodica.database import SessionLocal

        db = SessionLocal()

    try:
        user, password_used = create_user(db, args.identifier, args.password)
    except InvalidChangesetError as e:
        for field, messages in e.errors.items():
            for message in messages:
                logger.error("  %s %s", field, message)
        return 1
    finally:
        if owns_session:
            db.close()

    logger.info("")
    logger.info("User setup complete:")
    logger.info("  Identifier: %s", user.identifier)
    logger.info("  ID: %s", user.id)
    if password_used != args.password:
        logger.info("  Password: %s", password_used)
        logger.info("  Store it now, it is not kept in plain text.")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    sys.exit(main())
