"""SQLAlchemy models."""

from src.models.api_token import ApiToken
from src.models.asciicast import Asciicast
from src.models.expiring_token import ExpiringToken
from src.models.social import Comment, Like
from src.models.user import User

__all__ = [
    "User",
    "ApiToken",
    "Asciicast",
    "Like",
    "Comment",
    "ExpiringToken",
]
