"""Expose reusable UI components."""
from __future__ import annotations

from . import cards, layout

__all__ = [
    "cards",
    "layout",
]
