"""User token model for session management."""

import secrets
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, LargeBinary, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from animelodica.database import Base

if TYPE_CHECKING:
    from animelodica.models.user import User

SESSION_CONTEXT = "session"
TOKEN_SIZE = 32


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UserToken(Base):
    """Opaque token issued to a user for a given context."""

    __tablename__ = "users_tokens"
    __table_args__ = (
        UniqueConstraint("context", "token", name="users_tokens_context_token_index"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    token: Mapped[bytes] = mapped_column(LargeBinary)
    context: Mapped[str] = mapped_column(String(32))
    inserted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    # Relationships
    user: Mapped["User"] = relationship(back_populates="tokens")

    @classmethod
    def build_session_token(cls, user: "User") -> tuple[bytes, "UserToken"]:
        """Generate a random session token for ``user``.

        The raw token is returned to be stored in the session; the row keeps
        the same bytes so a lookup can be done by value.
        """
        token = secrets.token_bytes(TOKEN_SIZE)
        return token, cls(token=token, context=SESSION_CONTEXT, user_id=user.id)

    def __repr__(self) -> str:
        return f"<UserToken(id={self.id}, user_id='{self.user_id}', context='{self.context}')>"
