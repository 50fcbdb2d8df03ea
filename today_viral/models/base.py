"""Utility helpers shared across ORM models."""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def created_at_column() -> Column:
    # Client-side default keeps sub-second ordering on backends whose now() is coarse.
    return Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)


class TimestampMixin:
    """Reusable timestamp columns with timezone-aware defaults."""

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        nullable=False,
    )


__all__ = ["TimestampMixin", "created_at_column", "utcnow"]
