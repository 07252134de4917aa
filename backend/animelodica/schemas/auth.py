"""Schemas for account endpoints.

Field rules (lengths, formats, uniqueness) live in the user changesets so
that every violation comes back keyed by field; these schemas only shape
the request bodies.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class UserRegister(BaseModel):
    """Schema for user registration."""

    identifier: str | None = None
    password: str | None = None


class UserLogin(BaseModel):
    """Schema for user login."""

    identifier: str = ""
    password: str = ""
    remember_me: bool = False


class UpdateIdentifierRequest(BaseModel):
    """Schema for changing the identifier from the settings page."""

    current_password: str = ""
    identifier: str | None = None


class UpdatePasswordRequest(BaseModel):
    """Schema for changing the password from the settings page."""

    current_password: str = ""
    password: str | None = None
    password_confirmation: str | None = None


class UserInfo(BaseModel):
    """Schema for user info in responses. Never carries password data."""

    id: str
    identifier: str
    confirmed_at: datetime | None = None

    model_config = {"from_attributes": True}


class SessionResponse(BaseModel):
    """Schema for responses that start a session."""

    message: str
    redirect_to: str = Field(description="Path to continue to after logging in")
    user: UserInfo


class RegistrationForm(BaseModel):
    """Schema describing the registration form state."""

    required: list[str]
    valid: bool = True
    errors: dict[str, list[str]] = Field(default_factory=dict)


class LoginForm(BaseModel):
    """Schema describing the login form state."""

    identifier: str | None = None


class SettingsResponse(BaseModel):
    """Schema for settings updates that keep the current session."""

    message: str
    user: UserInfo
