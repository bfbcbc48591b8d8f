"""add feed_token to users

Revision ID: 8b6e0d41c2a5
Revises: 3f2a9c1d7e4b
Create Date: 2016-01-27 21:23:55.000000

"""

import secrets
from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8b6e0d41c2a5"
down_revision: str | None = "3f2a9c1d7e4b"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

# Lightweight table for the backfill, independent of the current models
users = sa.table(
    "users",
    sa.column("id", sa.Integer),
    sa.column("feed_token", sa.String),
)


def upgrade() -> None:
    # Column starts nullable so existing rows can be backfilled first
    op.add_column("users", sa.Column("feed_token", sa.String(255), nullable=True))

    conn = op.get_bind()
    user_ids = conn.execute(sa.select(users.c.id)).scalars().all()
    for user_id in user_ids:
        conn.execute(
            users.update()
            .where(users.c.id == user_id)
            .values(feed_token=secrets.token_urlsafe(16))
        )

    # SQLite rebuilds the table here and cannot reflect expression indexes
    op.drop_index("ix_users_username_lower", table_name="users")
    with op.batch_alter_table("users") as batch_op:
        batch_op.alter_column("feed_token", existing_type=sa.String(255), nullable=False)
        batch_op.create_index(op.f("ix_users_feed_token"), ["feed_token"], unique=True)
    op.create_index("ix_users_username_lower", "users", [sa.text("lower(username)")], unique=True)


def downgrade() -> None:
    op.drop_index("ix_users_username_lower", table_name="users")
    with op.batch_alter_table("users") as batch_op:
        batch_op.drop_index(op.f("ix_users_feed_token"))
        batch_op.drop_column("feed_token")
    op.create_index("ix_users_username_lower", "users", [sa.text("lower(username)")], unique=True)
