"""Migration tests against a throwaway SQLite database."""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError

ROOT = Path(__file__).resolve().parents[1]

CREATE_ACCOUNT_TABLES = "3f2a9c1d7e4b"

INSERT_USER = text(
    "INSERT INTO users (email, username, auth_token) VALUES (:email, :username, :auth_token)"
)


@pytest.fixture
def migration_db(tmp_path):
    """Alembic config and engine for an empty SQLite file."""
    url = f"sqlite:///{tmp_path / 'migrations.db'}"
    config = Config()
    config.set_main_option("script_location", str(ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", url)
    engine = create_engine(url)
    yield config, engine
    engine.dispose()


def test_feed_token_backfill(migration_db):
    """Test existing users each get a distinct feed token."""
    config, engine = migration_db
    command.upgrade(config, CREATE_ACCOUNT_TABLES)

    with engine.begin() as conn:
        for i in range(3):
            conn.execute(
                INSERT_USER,
                {"email": f"user{i}@example.com", "username": f"user{i}", "auth_token": f"a{i}"},
            )

    command.upgrade(config, "head")

    with engine.connect() as conn:
        tokens = conn.execute(text("SELECT feed_token FROM users")).scalars().all()
    assert len(tokens) == 3
    assert all(tokens)
    assert len(set(tokens)) == 3


def test_feed_token_is_required_after_upgrade(migration_db):
    config, engine = migration_db
    command.upgrade(config, "head")

    with pytest.raises(IntegrityError):
        with engine.begin() as conn:
            conn.execute(
                INSERT_USER, {"email": "a@example.com", "username": "a1", "auth_token": "a"}
            )


def test_username_index_survives_upgrade(migration_db):
    """Test case-insensitive username uniqueness is still enforced after the table rebuild."""
    config, engine = migration_db
    command.upgrade(config, "head")

    insert = text(
        "INSERT INTO users (email, username, auth_token, feed_token) "
        "VALUES (:email, :username, :auth_token, :feed_token)"
    )
    with engine.begin() as conn:
        conn.execute(
            insert,
            {"email": "a@example.com", "username": "bob", "auth_token": "a", "feed_token": "f"},
        )

    with pytest.raises(IntegrityError):
        with engine.begin() as conn:
            conn.execute(
                insert,
                {"email": "b@example.com", "username": "Bob", "auth_token": "b", "feed_token": "g"},
            )


def test_feed_token_downgrade(migration_db):
    config, engine = migration_db
    command.upgrade(config, "head")
    command.downgrade(config, CREATE_ACCOUNT_TABLES)

    columns = {column["name"] for column in inspect(engine).get_columns("users")}
    assert "feed_token" not in columns
    assert "auth_token" in columns
