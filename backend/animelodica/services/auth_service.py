"""Authentication service for password hashing and remember-me cookies."""

import base64
import binascii
import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache

import bcrypt
import jwt

from animelodica.config import settings

logger = logging.getLogger(__name__)

REMEMBER_ME_TOKEN_TYPE = "remember_me"


class AuthService:
    """Service for authentication operations."""

    @staticmethod
    @lru_cache(maxsize=1)
    def get_dummy_hash() -> str:
        """Get a dummy password hash for timing-consistent verification.

        Used when a user doesn't exist so a failed lookup costs as much as a
        failed password check.
        """
        return AuthService.hash_password("no user dummy password")

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        """Verify a password against its hash."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError as e:
            logger.error(f"Password verification error: {e}")
            return False

    @staticmethod
    def no_user_verify() -> bool:
        """Burn a hash check and fail, for lookups that found no user."""
        AuthService.verify_password("", AuthService.get_dummy_hash())
        return False

    @staticmethod
    def encode_token(token: bytes) -> str:
        """Encode raw token bytes for storage in a session or cookie."""
        return base64.urlsafe_b64encode(token).decode("ascii")

    @staticmethod
    def decode_token(encoded: str) -> bytes | None:
        """Decode a value produced by ``encode_token``."""
        try:
            return base64.urlsafe_b64decode(encoded.encode("ascii"))
        except (binascii.Error, ValueError, UnicodeEncodeError):
            return None

    @staticmethod
    def create_remember_me_token(
        token: bytes,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Sign a session token for the remember-me cookie."""
        if expires_delta is None:
            expires_delta = timedelta(days=settings.session_validity_days)

        now = datetime.now(UTC)
        payload = {
            "sub": AuthService.encode_token(token),
            "exp": now + expires_delta,
            "iat": now,
            "type": REMEMBER_ME_TOKEN_TYPE,
        }
        return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)

    @staticmethod
    def decode_remember_me_token(value: str) -> bytes | None:
        """Verify a remember-me cookie and return the session token it carries."""
        try:
            payload = jwt.decode(
                value,
                settings.secret_key,
                algorithms=[settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Remember-me cookie expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid remember-me cookie: {e}")
            return None

        if payload.get("type") != REMEMBER_ME_TOKEN_TYPE or "sub" not in payload:
            return None
        return AuthService.decode_token(payload["sub"])
