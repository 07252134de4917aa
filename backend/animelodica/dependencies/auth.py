"""Authentication dependencies for protected routes."""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from animelodica.database import get_db
from animelodica.models.user import User
from animelodica.services.accounts_service import AccountsService
from animelodica.services.user_auth import (
    SIGNED_IN_PATH,
    USER_RETURN_TO_SESSION_KEY,
    session_token,
)


def fetch_current_user(request: Request, db: Session = Depends(get_db)) -> User | None:
    """
    Resolve the user behind the session token, or None.

    Usage:
        @router.get("/")
        def home(user: User | None = Depends(fetch_current_user)):
            ...
    """
    token = session_token(request)
    user = AccountsService(db).get_user_by_session_token(token) if token else None
    request.state.current_user = user
    return user


def require_authenticated_user(
    request: Request,
    current_user: User | None = Depends(fetch_current_user),
) -> User:
    """
    Require an authenticated user.

    GET requests remember their path so logging in can return to it.

    Usage:
        @router.get("/users/settings")
        def settings(user: User = Depends(require_authenticated_user)):
            return {"user_id": user.id}
    """
    if current_user is None:
        if request.method == "GET":
            request.session[USER_RETURN_TO_SESSION_KEY] = request.url.path
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You must log in to access this page.",
        )
    return current_user


def redirect_if_user_is_authenticated(
    current_user: User | None = Depends(fetch_current_user),
) -> None:
    """Send already authenticated users away from the login and registration routes."""
    if current_user is not None:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail="Already logged in",
            headers={"Location": SIGNED_IN_PATH},
        )
