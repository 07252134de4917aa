"""Tests for UserTokenRepository."""

from datetime import UTC, datetime, timedelta

from animelodica.models.user_token import SESSION_CONTEXT, UserToken
from animelodica.services.repositories.user_token_repository import UserTokenRepository
from tests.accounts_fixtures import user_fixture


def add_session_token(db, user, inserted_at=None) -> bytes:
    token, user_token = UserToken.build_session_token(user)
    if inserted_at is not None:
        user_token.inserted_at = inserted_at
    UserTokenRepository(db).add(user_token)
    return token


class TestUserTokenRepository:
    """Test cases for UserTokenRepository."""

    def test_find_user_by_session_token(self, db, user):
        token = add_session_token(db, user)

        found = UserTokenRepository(db).find_user_by_session_token(token, validity_days=60)
        assert found.id == user.id

    def test_find_user_by_session_token_inside_window(self, db, user):
        token = add_session_token(db, user, datetime.now(UTC) - timedelta(days=59))

        assert UserTokenRepository(db).find_user_by_session_token(token, 60) is not None

    def test_find_user_by_session_token_outside_window(self, db, user):
        token = add_session_token(db, user, datetime.now(UTC) - timedelta(days=61))

        assert UserTokenRepository(db).find_user_by_session_token(token, 60) is None

    def test_delete_by_token(self, db, user):
        token = add_session_token(db, user)
        repo = UserTokenRepository(db)

        assert repo.delete_by_token(token, SESSION_CONTEXT) == 1
        assert repo.delete_by_token(token, SESSION_CONTEXT) == 0
        assert repo.find_user_by_session_token(token, 60) is None

    def test_delete_by_token_respects_context(self, db, user):
        token = add_session_token(db, user)

        assert UserTokenRepository(db).delete_by_token(token, "confirm") == 0

    def test_delete_all_for_user(self, db, user):
        other = user_fixture(db)
        add_session_token(db, user)
        add_session_token(db, user)
        other_token = add_session_token(db, other)
        repo = UserTokenRepository(db)

        assert repo.delete_all_for_user(user.id) == 2
        db.commit()

        assert db.query(UserToken).filter_by(user_id=user.id).count() == 0
        assert repo.find_user_by_session_token(other_token, 60).id == other.id

    def test_find_user_by_session_token_ignores_non_bytes(self, db, user):
        add_session_token(db, user)

        assert UserTokenRepository(db).find_user_by_session_token("oops", 60) is None
