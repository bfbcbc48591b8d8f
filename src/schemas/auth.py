"""Authentication schemas."""

from pydantic import BaseModel, EmailStr, Field

from src.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Request a login link for an email address."""

    email: EmailStr = Field(..., max_length=255)


class LoginResponse(BaseModel):
    """Acknowledgement that a login link was issued."""

    message: str


class SessionResponse(BaseModel):
    """Result of redeeming a login link."""

    auth_token: str
    token_type: str = "bearer"  # noqa: S105
    first_login: bool
    user: UserResponse
