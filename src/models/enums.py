"""Enums for model fields."""

from enum import Enum


class TokenKind(str, Enum):
    """Per-user opaque tokens stored on the users table."""

    AUTH = "auth"
    FEED = "feed"

    @property
    def column_name(self) -> str:
        """Name of the users column holding this kind of token."""
        return f"{self.value}_token"
