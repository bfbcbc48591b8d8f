"""Asciicast (terminal recording) model."""

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Asciicast(Base, TimestampMixin):
    """A terminal session recording owned by a user."""

    __tablename__ = "asciicasts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=True)
    duration = Column(Float, nullable=True)  # seconds
    private = Column(Boolean, nullable=False, default=False, index=True)

    # Relationships
    user = relationship("User", back_populates="asciicasts")
    likes = relationship("Like", back_populates="asciicast", passive_deletes=True)
    comments = relationship("Comment", back_populates="asciicast", passive_deletes=True)
