"""Helpers for creating users in tests."""

from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from animelodica.models.user import User
from animelodica.services.accounts_service import AccountsService


def unique_user_identifier() -> str:
    return f"user{uuid4().hex[:12]}@example.com"


def valid_user_password() -> str:
    return "hello world!"


def valid_user_attributes(**attrs) -> dict:
    return {
        "identifier": unique_user_identifier(),
        "password": valid_user_password(),
        **attrs,
    }


def user_fixture(db: Session, **attrs) -> User:
    return AccountsService(db).register_user(valid_user_attributes(**attrs))


def register_and_log_in(
    test_client: TestClient, identifier: str | None = None, password: str | None = None
) -> dict:
    """Register through the API, leaving the client logged in."""
    response = test_client.post(
        "/users/register",
        json={
            "identifier": identifier or unique_user_identifier(),
            "password": password or valid_user_password(),
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["user"]
