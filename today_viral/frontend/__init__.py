"""Headless client-side components that drive the web service over HTTP."""
from .api import BackendError, ViralApiClient
from .composer import Composer
from .feed import FeedState
from .metadata import fetch_video_metadata
from .profile import ProfileStats, ProfileView
from .session import AuthSession, SessionState, SignInRequired
from .video_card import VideoCard

__all__ = [
    "AuthSession",
    "BackendError",
    "Composer",
    "FeedState",
    "ProfileStats",
    "ProfileView",
    "SessionState",
    "SignInRequired",
    "VideoCard",
    "ViralApiClient",
    "fetch_video_metadata",
]
