"""Logging users in and out of the HTTP session."""

import logging

from fastapi import Request, Response
from sqlalchemy.orm import Session

from animelodica.config import settings
from animelodica.models.user import User
from animelodica.services.accounts_service import AccountsService
from animelodica.services.auth_service import AuthService

logger = logging.getLogger(__name__)

USER_TOKEN_SESSION_KEY = "user_token"
USER_RETURN_TO_SESSION_KEY = "user_return_to"
SIGNED_IN_PATH = "/"


def log_in_user(
    request: Request,
    response: Response,
    db: Session,
    user: User,
    remember_me: bool = False,
) -> str:
    """Log the user in and return the path to continue to.

    The session is renewed so a fixated session id can't be reused, and the
    pending return path is read before the renewal clears it.
    """
    token = AccountsService(db).generate_user_session_token(user)
    user_return_to = request.session.get(USER_RETURN_TO_SESSION_KEY)

    request.session.clear()
    request.session[USER_TOKEN_SESSION_KEY] = AuthService.encode_token(token)

    if remember_me:
        _write_remember_me_cookie(response, token)

    logger.info(f"User logged in: {user.id}")
    return user_return_to or SIGNED_IN_PATH


def log_out_user(request: Request, response: Response, db: Session) -> None:
    """Log the user out, deleting the session token and the remember-me cookie.

    Safe to call when nobody is logged in.
    """
    encoded = request.session.get(USER_TOKEN_SESSION_KEY)
    token = AuthService.decode_token(encoded) if encoded else None
    if token:
        AccountsService(db).delete_user_session_token(token)
        logger.info("User logged out")

    request.session.clear()
    response.delete_cookie(settings.remember_me_cookie_name)


def session_token(request: Request) -> bytes | None:
    """Read the session token from the session, else from the remember-me cookie.

    A token recovered from the cookie is copied back into the session.
    """
    encoded = request.session.get(USER_TOKEN_SESSION_KEY)
    if encoded:
        return AuthService.decode_token(encoded)

    cookie = request.cookies.get(settings.remember_me_cookie_name)
    if not cookie:
        return None

    token = AuthService.decode_remember_me_token(cookie)
    if token:
        request.session[USER_TOKEN_SESSION_KEY] = AuthService.encode_token(token)
    return token


def _write_remember_me_cookie(response: Response, token: bytes) -> None:
    response.set_cookie(
        settings.remember_me_cookie_name,
        AuthService.create_remember_me_token(token),
        max_age=settings.session_validity_days * 24 * 60 * 60,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )
