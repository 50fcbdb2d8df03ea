"""Project-wide constant values."""
from __future__ import annotations

FEED_PAGE_SIZE = 10

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
USERNAME_PATTERN = r"^[A-Za-z0-9_]+$"

POST_TITLE_MAX_LENGTH = 200
COMMENT_MAX_LENGTH = 500

# Page routes shared by the page shells and the headless frontend.
LANDING_ROUTE = "/"
SIGN_IN_ROUTE = "/auth"
FEED_ROUTE = "/go-viral"
CREATE_ROUTE = "/create"
PROFILE_ROUTE = "/profile"

__all__ = [
    "FEED_PAGE_SIZE",
    "USERNAME_MIN_LENGTH",
    "USERNAME_MAX_LENGTH",
    "USERNAME_PATTERN",
    "POST_TITLE_MAX_LENGTH",
    "COMMENT_MAX_LENGTH",
    "LANDING_ROUTE",
    "SIGN_IN_ROUTE",
    "FEED_ROUTE",
    "CREATE_ROUTE",
    "PROFILE_ROUTE",
]
