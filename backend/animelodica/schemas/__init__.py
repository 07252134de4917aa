"""Pydantic schemas for API validation."""

from animelodica.schemas.auth import (
    LoginForm,
    RegistrationForm,
    SessionResponse,
    SettingsResponse,
    UpdateIdentifierRequest,
    UpdatePasswordRequest,
    UserInfo,
    UserLogin,
    UserRegister,
)
from animelodica.schemas.common import (
    ErrorDetail,
    ErrorResponse,
    FieldErrorsResponse,
    MessageResponse,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "FieldErrorsResponse",
    "LoginForm",
    "MessageResponse",
    "RegistrationForm",
    "SessionResponse",
    "SettingsResponse",
    "UpdateIdentifierRequest",
    "UpdatePasswordRequest",
    "UserInfo",
    "UserLogin",
    "UserRegister",
]
