"""Aggregate router exports."""
from .auth import router as auth_router
from .metadata import router as metadata_router
from .posts import router as posts_router
from .profiles import router as profiles_router

__all__ = [
    "auth_router",
    "metadata_router",
    "posts_router",
    "profiles_router",
]
