"""UI page modules."""
from __future__ import annotations

from . import auth, create, feed, landing, profile

__all__ = ["auth", "create", "feed", "landing", "profile"]
