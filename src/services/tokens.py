"""Random token generation and single-use login tokens."""

import logging
import secrets
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.expiring_token import ExpiringToken
from src.models.user import User

logger = logging.getLogger(__name__)

TOKEN_BYTES = 16


def generate_token() -> str:
    """Generate a URL-safe random token (16 bytes of entropy)."""
    return secrets.token_urlsafe(TOKEN_BYTES)


class ExpiringTokenService:
    """Issues and consumes the short-lived tokens used in login links."""

    def __init__(self, db: Session, ttl: timedelta | None = None):
        self.db = db
        if ttl is None:
            ttl = timedelta(minutes=get_settings().login_token_ttl_minutes)
        self.ttl = ttl

    def issue(self, user: User) -> ExpiringToken:
        """Create a new login token for the user."""
        token = ExpiringToken(
            user=user,
            token=generate_token(),
            expires_at=datetime.now(UTC) + self.ttl,
        )
        self.db.add(token)
        self.db.commit()
        self.db.refresh(token)
        logger.info(f"Issued login token for user {user.id}")
        return token

    def consume(self, token: str | None) -> User | None:
        """Redeem a login token, returning its user.

        Returns None when the token is unknown, already used or expired.
        """
        if not token:
            return None

        record = self.db.query(ExpiringToken).filter(ExpiringToken.token == token).first()
        if record is None:
            return None
        if not record.is_usable():
            logger.info(f"Rejected stale login token for user {record.user_id}")
            return None

        record.used_at = datetime.now(UTC)
        self.db.commit()
        return record.user
