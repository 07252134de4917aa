"""User model for authentication."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import DateTime, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from animelodica.database import Base

if TYPE_CHECKING:
    from animelodica.models.user_token import UserToken


class User(Base):
    """User model representing registered accounts.

    ``password`` is a virtual attribute: it only carries a raw password
    between a changeset and the hashing step and is never mapped to a column.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    identifier: Mapped[str] = mapped_column(String(160))
    hashed_password: Mapped[str] = mapped_column(String(255))
    confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    inserted_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(), onupdate=func.now()
    )

    password = None

    # Relationships
    tokens: Mapped[list["UserToken"]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, identifier='{self.identifier}')>"


# Identifiers are unique regardless of case
Index("users_identifier_lower_index", func.lower(User.__table__.c.identifier), unique=True)
