"""Account settings routes."""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from animelodica.database import get_db
from animelodica.dependencies.auth import require_authenticated_user
from animelodica.models.user import User
from animelodica.schemas.auth import (
    SessionResponse,
    SettingsResponse,
    UpdateIdentifierRequest,
    UpdatePasswordRequest,
    UserInfo,
)
from animelodica.schemas.common import ErrorResponse, FieldErrorsResponse
from animelodica.services.accounts_service import AccountsService
from animelodica.services.user_auth import USER_RETURN_TO_SESSION_KEY, log_in_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users/settings",
    tags=["settings"],
    responses={401: {"model": ErrorResponse}, 422: {"model": FieldErrorsResponse}},
)

SETTINGS_PATH = "/users/settings"


@router.get("", response_model=UserInfo)
def get_settings(current_user: User = Depends(require_authenticated_user)) -> User:
    """Get the current user's account settings."""
    return current_user


@router.put("/identifier", response_model=SettingsResponse)
def update_identifier(
    data: UpdateIdentifierRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_authenticated_user),
) -> dict:
    """Change the identifier. Requires the current password."""
    user = AccountsService(db).update_user_identifier(
        current_user,
        data.current_password,
        data.model_dump(include={"identifier"}, exclude_unset=True),
    )
    return {"message": "Identifier updated successfully.", "user": UserInfo.model_validate(user)}


@router.put("/password", response_model=SessionResponse)
def update_password(
    request: Request,
    response: Response,
    data: UpdatePasswordRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_authenticated_user),
) -> dict:
    """Change the password.

    Every session of the user is revoked, including this one, so a fresh
    session is started right away.
    """
    user = AccountsService(db).update_user_password(
        current_user,
        data.current_password,
        data.model_dump(include={"password", "password_confirmation"}, exclude_unset=True),
    )

    request.session[USER_RETURN_TO_SESSION_KEY] = SETTINGS_PATH
    redirect_to = log_in_user(request, response, db, user)
    return {
        "message": "Password updated successfully!",
        "redirect_to": redirect_to,
        "user": UserInfo.model_validate(user),
    }
