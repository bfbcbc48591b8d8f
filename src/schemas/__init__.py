"""Pydantic schemas for request/response validation."""

from src.schemas.api_token import ApiTokenCreate, ApiTokenListResponse, ApiTokenResponse
from src.schemas.asciicast import AsciicastPageResponse, AsciicastResponse
from src.schemas.auth import LoginRequest, LoginResponse, SessionResponse
from src.schemas.user import UserProfileResponse, UserResponse, UserUpdate

__all__ = [
    "ApiTokenCreate",
    "ApiTokenListResponse",
    "ApiTokenResponse",
    "AsciicastPageResponse",
    "AsciicastResponse",
    "LoginRequest",
    "LoginResponse",
    "SessionResponse",
    "UserProfileResponse",
    "UserResponse",
    "UserUpdate",
]
