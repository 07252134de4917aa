"""Integration tests for the account settings routes."""

from fastapi.testclient import TestClient

from animelodica.main import app
from tests.accounts_fixtures import (
    register_and_log_in,
    unique_user_identifier,
    valid_user_password,
)


class TestGetSettings:
    def test_requires_login(self, client):
        response = client.get("/users/settings")

        assert response.status_code == 401
        assert response.json() == {"errors": {"detail": "You must log in to access this page."}}

    def test_login_returns_to_settings(self, client):
        """A rejected GET is remembered and used after logging in."""
        identifier = unique_user_identifier()
        register_and_log_in(client, identifier)
        client.delete("/users/log_out")

        client.get("/users/settings")
        response = client.post(
            "/users/log_in",
            json={"identifier": identifier, "password": valid_user_password()},
        )

        assert response.json()["redirect_to"] == "/users/settings"

    def test_return_path_is_consumed(self, client):
        identifier = unique_user_identifier()
        register_and_log_in(client, identifier)
        client.delete("/users/log_out")
        client.get("/users/settings")
        client.post(
            "/users/log_in",
            json={"identifier": identifier, "password": valid_user_password()},
        )
        client.delete("/users/log_out")

        response = client.post(
            "/users/log_in",
            json={"identifier": identifier, "password": valid_user_password()},
        )

        assert response.json()["redirect_to"] == "/"

    def test_returns_current_user(self, client):
        user = register_and_log_in(client)

        response = client.get("/users/settings")

        assert response.status_code == 200
        assert response.json() == {
            "id": user["id"],
            "identifier": user["identifier"],
            "confirmed_at": None,
        }


class TestUpdateIdentifier:
    def test_requires_login(self, client):
        response = client.put(
            "/users/settings/identifier",
            json={"current_password": valid_user_password(), "identifier": "new@example.com"},
        )

        assert response.status_code == 401

    def test_updates_identifier(self, client):
        register_and_log_in(client)
        identifier = unique_user_identifier()

        response = client.put(
            "/users/settings/identifier",
            json={"current_password": valid_user_password(), "identifier": identifier},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Identifier updated successfully."
        assert response.json()["user"]["identifier"] == identifier
        assert client.get("/users/settings").json()["identifier"] == identifier

    def test_wrong_current_password(self, client):
        register_and_log_in(client)

        response = client.put(
            "/users/settings/identifier",
            json={"current_password": "invalid", "identifier": unique_user_identifier()},
        )

        assert response.status_code == 422
        assert response.json() == {"errors": {"current_password": ["is not valid"]}}

    def test_identifier_taken(self, client):
        taken = unique_user_identifier()
        register_and_log_in(client, taken)
        client.delete("/users/log_out")
        register_and_log_in(client)

        response = client.put(
            "/users/settings/identifier",
            json={"current_password": valid_user_password(), "identifier": taken.upper()},
        )

        assert response.status_code == 422
        assert response.json()["errors"]["identifier"] == ["has already been taken"]

    def test_identifier_did_not_change(self, client):
        user = register_and_log_in(client)

        response = client.put(
            "/users/settings/identifier",
            json={"current_password": valid_user_password(), "identifier": user["identifier"]},
        )

        assert response.status_code == 422
        assert response.json() == {"errors": {"identifier": ["did not change"]}}


class TestUpdatePassword:
    def test_updates_password_and_renews_session(self, client):
        user = register_and_log_in(client)

        response = client.put(
            "/users/settings/password",
            json={
                "current_password": valid_user_password(),
                "password": "new valid password",
                "password_confirmation": "new valid password",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Password updated successfully!"
        assert data["redirect_to"] == "/users/settings"
        assert client.get("/users/settings").status_code == 200

        client.delete("/users/log_out")
        login = client.post(
            "/users/log_in",
            json={"identifier": user["identifier"], "password": "new valid password"},
        )
        assert login.status_code == 200

    def test_revokes_other_sessions(self, client):
        identifier = unique_user_identifier()
        register_and_log_in(client, identifier)

        with TestClient(app) as other_client:
            other_client.post(
                "/users/log_in",
                json={
                    "identifier": identifier,
                    "password": valid_user_password(),
                    "remember_me": True,
                },
            )
            assert other_client.get("/users/settings").status_code == 200

            client.put(
                "/users/settings/password",
                json={
                    "current_password": valid_user_password(),
                    "password": "new valid password",
                    "password_confirmation": "new valid password",
                },
            )

            assert other_client.get("/users/settings").status_code == 401

    def test_invalid_password(self, client):
        register_and_log_in(client)

        response = client.put(
            "/users/settings/password",
            json={
                "current_password": valid_user_password(),
                "password": "not valid",
                "password_confirmation": "another",
            },
        )

        assert response.status_code == 422
        assert response.json() == {
            "errors": {
                "password": ["should be at least 12 character(s)"],
                "password_confirmation": ["does not match password"],
            }
        }
        assert client.get("/users/settings").status_code == 200

    def test_wrong_current_password(self, client):
        register_and_log_in(client)

        response = client.put(
            "/users/settings/password",
            json={"current_password": "invalid", "password": "new valid password"},
        )

        assert response.status_code == 422
        assert response.json() == {"errors": {"current_password": ["is not valid"]}}
