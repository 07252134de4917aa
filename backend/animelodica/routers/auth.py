"""Registration, login and logout routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from animelodica.database import get_db
from animelodica.dependencies.auth import redirect_if_user_is_authenticated
from animelodica.models.user import User
from animelodica.rate_limiter import LOG_IN_RATE_LIMIT, REGISTER_RATE_LIMIT, limiter
from animelodica.schemas.auth import (
    LoginForm,
    RegistrationForm,
    SessionResponse,
    UserInfo,
    UserLogin,
    UserRegister,
)
from animelodica.schemas.common import ErrorResponse, FieldErrorsResponse, MessageResponse
from animelodica.services.accounts_service import AccountsService
from animelodica.services.user_changesets import IDENTIFIER_MAX_LENGTH
from animelodica.services.user_auth import log_in_user, log_out_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["authentication"],
    responses={401: {"model": ErrorResponse}, 422: {"model": FieldErrorsResponse}},
)

# Last identifier typed into a failed login, shown again on the login form
LOGIN_IDENTIFIER_SESSION_KEY = "login_identifier"


@router.get(
    "/register",
    response_model=RegistrationForm,
    dependencies=[Depends(redirect_if_user_is_authenticated)],
)
def registration_form(db: Session = Depends(get_db)) -> dict:
    """Describe the registration form."""
    changeset = AccountsService(db).change_user_registration(User())
    return {"required": changeset.required}


@router.post(
    "/register/validate",
    response_model=RegistrationForm,
    dependencies=[Depends(redirect_if_user_is_authenticated)],
)
def validate_registration(data: UserRegister, db: Session = Depends(get_db)) -> dict:
    """Validate registration params without creating anything."""
    changeset = AccountsService(db).change_user_registration(
        User(), data.model_dump(exclude_unset=True)
    )
    return {"required": changeset.required, "valid": changeset.valid, "errors": changeset.errors}


@router.post(
    "/register",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(redirect_if_user_is_authenticated)],
)
@limiter.limit(REGISTER_RATE_LIMIT)
def register(
    request: Request, response: Response, data: UserRegister, db: Session = Depends(get_db)
) -> dict:
    """Register a new user and log them in."""
    user = AccountsService(db).register_user(data.model_dump(exclude_unset=True))
    redirect_to = log_in_user(request, response, db, user)

    return {
        "message": "Account created successfully!",
        "redirect_to": redirect_to,
        "user": UserInfo.model_validate(user),
    }


@router.get(
    "/log_in",
    response_model=LoginForm,
    dependencies=[Depends(redirect_if_user_is_authenticated)],
)
def login_form(request: Request) -> dict:
    """Describe the login form, prefilled after a failed attempt."""
    return {"identifier": request.session.pop(LOGIN_IDENTIFIER_SESSION_KEY, None)}


@router.post(
    "/log_in",
    response_model=SessionResponse,
    dependencies=[Depends(redirect_if_user_is_authenticated)],
)
@limiter.limit(LOG_IN_RATE_LIMIT)
def log_in(
    request: Request, response: Response, data: UserLogin, db: Session = Depends(get_db)
) -> dict:
    """Log in with identifier and password."""
    user = AccountsService(db).get_user_by_identifier_and_password(data.identifier, data.password)
    if not user:
        # Same answer for unknown identifier and wrong password
        request.session[LOGIN_IDENTIFIER_SESSION_KEY] = data.identifier[:IDENTIFIER_MAX_LENGTH]
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid identifier or password",
        )

    redirect_to = log_in_user(request, response, db, user, remember_me=data.remember_me)
    return {
        "message": "Welcome back!",
        "redirect_to": redirect_to,
        "user": UserInfo.model_validate(user),
    }


@router.delete("/log_out", response_model=MessageResponse)
def log_out(request: Request, response: Response, db: Session = Depends(get_db)) -> dict:
    """Log out, revoking the session token."""
    log_out_user(request, response, db)
    return {"message": "Logged out successfully."}
