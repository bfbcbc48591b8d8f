"""User schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    """Signed-in user information."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str | None
    email: str | None
    theme_name: str | None
    asciicasts_private_by_default: bool
    confirmed: bool
    is_admin: bool = False


class UserProfileResponse(BaseModel):
    """Public profile of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    theme_name: str | None
    public_asciicast_count: int
    asciicast_count: int | None = None  # only shown to the owner


class UserUpdate(BaseModel):
    """Profile update request. Omitted fields are left unchanged."""

    username: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    theme_name: str | None = Field(None, max_length=32)
    asciicasts_private_by_default: bool | None = None
