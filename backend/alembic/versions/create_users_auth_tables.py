"""Create users and users_tokens tables

Revision ID: create_users_auth_tables
Revises:
Create Date: 2026-10-18

This migration adds:
1. users table, unique on lower(identifier)
2. users_tokens table for session tokens, unique on (context, token)
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "create_users_auth_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("identifier", sa.String(160), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("inserted_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
    )
    op.create_index(
        "users_identifier_lower_index",
        "users",
        [sa.text("lower(identifier)")],
        unique=True,
    )

    # Create users_tokens table
    op.create_table(
        "users_tokens",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("token", sa.LargeBinary(), nullable=False),
        sa.Column("context", sa.String(32), nullable=False),
        sa.Column("inserted_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("context", "token", name="users_tokens_context_token_index"),
    )


def downgrade() -> None:
    op.drop_table("users_tokens")
    op.drop_index("users_identifier_lower_index", table_name="users")
    op.drop_table("users")
