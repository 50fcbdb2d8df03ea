"""SQLAlchemy ORM model for user profiles."""
from __future__ import annotations

from sqlalchemy import Column, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from today_viral.database import Base
from .base import TimestampMixin


class Profile(TimestampMixin, Base):
    __tablename__ = "profiles"

    # Shares its primary key with the identity issued by the hosted auth service.
    id = Column(UUID(as_uuid=True), primary_key=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    full_name = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    website = Column(String(255), nullable=True)
    avatar_url = Column(String(1024), nullable=True)

    posts = relationship("Post", back_populates="author", cascade="all, delete-orphan")
    likes = relationship("Like", back_populates="user", cascade="all, delete-orphan")
    comments = relationship("Comment", back_populates="user", cascade="all, delete-orphan")


__all__ = ["Profile"]
