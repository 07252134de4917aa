"""Tests for the create_user script."""

import logging

from animelodica.services.accounts_service import AccountsService
from tests.accounts_fixtures import unique_user_identifier, valid_user_password


def test_create_user_with_password(db):
    """Test registering a user with an explicit password."""
    from scripts.create_user import create_user

    identifier = unique_user_identifier()
    user, password = create_user(db, identifier, valid_user_password())

    assert user.identifier == identifier
    assert password == valid_user_password()
    assert AccountsService(db).get_user_by_identifier_and_password(identifier, password)


def test_create_user_password_from_environment(db, monkeypatch):
    from scripts.create_user import PASSWORD_ENV_VAR, create_user

    monkeypatch.setenv(PASSWORD_ENV_VAR, "password from env")
    user, password = create_user(db, unique_user_identifier())

    assert password == "password from env"


def test_create_user_generates_password(db, monkeypatch):
    from scripts.create_user import PASSWORD_ENV_VAR, create_user

    monkeypatch.delenv(PASSWORD_ENV_VAR, raising=False)
    user, password = create_user(db, unique_user_identifier())

    assert len(password) >= 12
    assert AccountsService(db).get_user_by_identifier_and_password(user.identifier, password)


def test_main_success(db):
    from scripts.create_user import main

    identifier = unique_user_identifier()
    exit_code = main([identifier, "--password", valid_user_password()], db=db)

    assert exit_code == 0
    assert AccountsService(db).get_user_by_identifier(identifier) is not None


def test_main_reports_field_errors(db, caplog):
    from scripts.create_user import main

    with caplog.at_level(logging.ERROR, logger="scripts.create_user"):
        exit_code = main(["not valid", "--password", "short"], db=db)

    assert exit_code == 1
    assert "identifier must have no spaces" in caplog.text
    assert "password should be at least 12 character(s)" in caplog.text


def test_main_rejects_duplicate(db):
    from scripts.create_user import main

    identifier = unique_user_identifier()
    assert main([identifier, "--password", valid_user_password()], db=db) == 0
    assert main([identifier.upper(), "--password", valid_user_password()], db=db) == 1
