"""API token model."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class ApiToken(Base, TimestampMixin):
    """Credential a recording client (the CLI) uses to act as a user."""

    __tablename__ = "api_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token = Column(String(255), unique=True, nullable=False, index=True)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    user = relationship("User", back_populates="api_tokens")

    @property
    def active(self) -> bool:
        return self.revoked_at is None

    def revoke(self) -> None:
        """Mark the token revoked. Revoking twice keeps the first timestamp."""
        if self.revoked_at is None:
            self.revoked_at = datetime.now(UTC)

    def reassign_to(self, user) -> None:
        """Move ownership of this token to another user."""
        if self.user_id == user.id:
            return
        self.user = user
        self.touch()
