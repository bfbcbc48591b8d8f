"""User model."""

from sqlalchemy import Boolean, Column, Index, Integer, String, func
from sqlalchemy.orm import relationship, validates

from src.database import Base
from src.models import theme as themes
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Account that owns recordings, API tokens and login tokens."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(16), nullable=True)
    email = Column(String(255), unique=True, nullable=True, index=True)
    auth_token = Column(String(255), unique=True, nullable=False, index=True)
    feed_token = Column(String(255), unique=True, nullable=False, index=True)
    theme_name = Column(String(32), nullable=True)
    temporary_username = Column(String(255), nullable=True)
    asciicasts_private_by_default = Column(Boolean, nullable=False, default=False)

    # Relationships. Dependents are removed explicitly by UserService.destroy.
    api_tokens = relationship("ApiToken", back_populates="user", passive_deletes=True)
    asciicasts = relationship("Asciicast", back_populates="user", passive_deletes=True)
    likes = relationship("Like", back_populates="user", passive_deletes=True)
    comments = relationship("Comment", back_populates="user", passive_deletes=True)
    expiring_tokens = relationship("ExpiringToken", back_populates="user", passive_deletes=True)

    @validates("username", "email")
    def strip_whitespace(self, key: str, value: str | None) -> str | None:
        """Trim surrounding whitespace, None is stored as-is."""
        return value.strip() if value is not None else value

    @property
    def confirmed(self) -> bool:
        """A user is confirmed once an email address is known."""
        return bool(self.email)

    @property
    def theme(self) -> themes.Theme | None:
        return themes.for_name(self.theme_name)

    @property
    def new_asciicast_private(self) -> bool:
        return bool(self.asciicasts_private_by_default)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"


# Usernames are unique regardless of case ("Bob" and "bob" collide)
Index("ix_users_username_lower", func.lower(User.username), unique=True)
