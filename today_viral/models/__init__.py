"""Convenience exports for ORM models."""
from .post import Comment, Like, Post
from .profile import Profile

__all__ = [
    "Comment",
    "Like",
    "Post",
    "Profile",
]
