"""Asciicast schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AsciicastResponse(BaseModel):
    """Asciicast listing entry."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str | None
    duration: float | None
    private: bool
    created_at: datetime


class AsciicastPageResponse(BaseModel):
    """A page of a user's asciicasts."""

    model_config = ConfigDict(from_attributes=True)

    items: list[AsciicastResponse]
    page: int
    per_page: int
    total: int
    pages: int
