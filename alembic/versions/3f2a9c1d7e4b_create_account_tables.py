"""create account tables

Revision ID: 3f2a9c1d7e4b
Revises:
Create Date: 2016-01-20 10:12:31.104522

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7e4b"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def user_fk() -> sa.Column:
    return sa.Column(
        "user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(16), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("auth_token", sa.String(255), nullable=False),
        sa.Column("theme_name", sa.String(32), nullable=True),
        sa.Column("temporary_username", sa.String(255), nullable=True),
        sa.Column(
            "asciicasts_private_by_default",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
        ),
        *timestamps(),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"])
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_auth_token"), "users", ["auth_token"], unique=True)
    op.create_index("ix_users_username_lower", "users", [sa.text("lower(username)")], unique=True)

    op.create_table(
        "api_tokens",
        sa.Column("id", sa.Integer(), primary_key=True),
        user_fk(),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
    )
    op.create_index(op.f("ix_api_tokens_id"), "api_tokens", ["id"])
    op.create_index(op.f("ix_api_tokens_user_id"), "api_tokens", ["user_id"])
    op.create_index(op.f("ix_api_tokens_token"), "api_tokens", ["token"], unique=True)

    op.create_table(
        "asciicasts",
        sa.Column("id", sa.Integer(), primary_key=True),
        user_fk(),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("duration", sa.Float(), nullable=True),
        sa.Column("private", sa.Boolean(), server_default=sa.false(), nullable=False),
        *timestamps(),
    )
    op.create_index(op.f("ix_asciicasts_id"), "asciicasts", ["id"])
    op.create_index(op.f("ix_asciicasts_user_id"), "asciicasts", ["user_id"])
    op.create_index(op.f("ix_asciicasts_private"), "asciicasts", ["private"])

    for table in ("likes", "comments"):
        if table == "comments":
            extra = [sa.Column("body", sa.Text(), nullable=False)]
        else:
            extra = [sa.UniqueConstraint("user_id", "asciicast_id", name="uq_likes_user_asciicast")]
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True),
            user_fk(),
            sa.Column(
                "asciicast_id",
                sa.Integer(),
                sa.ForeignKey("asciicasts.id", ondelete="CASCADE"),
                nullable=False,
            ),
            *extra,
            *timestamps(),
        )
        op.create_index(op.f(f"ix_{table}_id"), table, ["id"])
        op.create_index(op.f(f"ix_{table}_user_id"), table, ["user_id"])
        op.create_index(op.f(f"ix_{table}_asciicast_id"), table, ["asciicast_id"])

    op.create_table(
        "expiring_tokens",
        sa.Column("id", sa.Integer(), primary_key=True),
        user_fk(),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
    )
    op.create_index(op.f("ix_expiring_tokens_id"), "expiring_tokens", ["id"])
    op.create_index(op.f("ix_expiring_tokens_user_id"), "expiring_tokens", ["user_id"])
    op.create_index(op.f("ix_expiring_tokens_token"), "expiring_tokens", ["token"], unique=True)


def downgrade() -> None:
    op.drop_table("expiring_tokens")
    op.drop_table("comments")
    op.drop_table("likes")
    op.drop_table("asciicasts")
    op.drop_table("api_tokens")
    op.drop_index("ix_users_username_lower", table_name="users")
    op.drop_table("users")
