"""Login token and token generation tests."""

import re
from datetime import timedelta

from src.models import ExpiringToken
from src.models import theme as themes
from src.services.tokens import ExpiringTokenService, generate_token


def test_generate_token_is_url_safe():
    token = generate_token()
    assert re.fullmatch(r"[A-Za-z0-9_-]{22}", token)
    assert generate_token() != token


def test_issue_login_token(db, user):
    """Test a login token is stored for the user with an expiry."""
    login_token = ExpiringTokenService(db).issue(user)

    assert login_token.user_id == user.id
    assert login_token.used_at is None
    assert login_token.is_usable()
    assert db.query(ExpiringToken).count() == 1


def test_consume_login_token_once(db, user):
    """Test a login token can only be redeemed once."""
    tokens = ExpiringTokenService(db)
    login_token = tokens.issue(user)

    assert tokens.consume(login_token.token).id == user.id
    assert tokens.consume(login_token.token) is None


def test_consume_expired_login_token(db, user):
    tokens = ExpiringTokenService(db, ttl=timedelta(minutes=-1))
    login_token = tokens.issue(user)

    assert tokens.consume(login_token.token) is None


def test_consume_unknown_login_token(db):
    tokens = ExpiringTokenService(db)
    assert tokens.consume("missing") is None
    assert tokens.consume("") is None
    assert tokens.consume(None) is None


def test_theme_lookup():
    assert themes.for_name("solarized-dark").label == "Solarized Dark"
    assert themes.for_name("unknown") is None
    assert themes.for_name(None) is None
    assert themes.DEFAULT_THEME.name in themes.theme_names()
