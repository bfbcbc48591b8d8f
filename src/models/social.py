"""Likes and comments left on asciicasts."""

from sqlalchemy import Column, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Like(Base, TimestampMixin):
    """A user's like of an asciicast."""

    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("user_id", "asciicast_id", name="uq_likes_user_asciicast"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    asciicast_id = Column(
        Integer, ForeignKey("asciicasts.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Relationships
    user = relationship("User", back_populates="likes")
    asciicast = relationship("Asciicast", back_populates="likes")


class Comment(Base, TimestampMixin):
    """A comment on an asciicast."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    asciicast_id = Column(
        Integer, ForeignKey("asciicasts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    body = Column(Text, nullable=False)

    # Relationships
    user = relationship("User", back_populates="comments")
    asciicast = relationship("Asciicast", back_populates="comments")
