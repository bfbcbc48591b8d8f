"""API token schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ApiTokenCreate(BaseModel):
    """Register a CLI API token with the signed-in account."""

    model_config = ConfigDict(str_strip_whitespace=True)

    token: str = Field(..., min_length=1, max_length=255)


class ApiTokenResponse(BaseModel):
    """API token information."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    token: str
    active: bool
    revoked_at: datetime | None
    created_at: datetime


class ApiTokenListResponse(BaseModel):
    """Active and revoked tokens of the signed-in user."""

    active: list[ApiTokenResponse]
    revoked: list[ApiTokenResponse]
