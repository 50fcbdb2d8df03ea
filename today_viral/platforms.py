"""Classify shared video links by hosting platform and extract their video ids."""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import parse_qs, urlparse


class Platform(str, Enum):
    TIKTOK = "tiktok"
    INSTAGRAM = "instagram"
    YOUTUBE = "youtube"
    FACEBOOK = "facebook"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class PlatformInfo:
    name: str
    icon: str
    domains: tuple[str, ...]


# Order matters: the first platform whose domain matches wins.
PLATFORMS: dict[Platform, PlatformInfo] = {
    Platform.TIKTOK: PlatformInfo(name="TikTok", icon="🎵", domains=("tiktok.com", "vm.tiktok.com")),
    Platform.INSTAGRAM: PlatformInfo(name="Instagram", icon="📷", domains=("instagram.com",)),
    Platform.YOUTUBE: PlatformInfo(name="YouTube", icon="▶️", domains=("youtube.com", "youtu.be")),
    Platform.FACEBOOK: PlatformInfo(name="Facebook", icon="👥", domains=("facebook.com", "fb.watch")),
}

OTHER_ICON = "📱"

INVALID_URL_MESSAGE = "Please enter a valid URL"
UNSUPPORTED_PLATFORM_MESSAGE = "Unsupported platform. Please use TikTok, Instagram, YouTube, or Facebook."

_YOUTUBE_SHORT_HOST = "youtu.be"
_YOUTUBE_PATH_ID = re.compile(r"^/(?:shorts|embed)/([^/?#]+)")
_TIKTOK_VIDEO_ID = re.compile(r"/video/(\d+)")
_INSTAGRAM_REEL_ID = re.compile(r"/reel/([^/?]+)")


class InvalidUrlError(ValueError):
    """Raised when the input cannot be parsed as an absolute http(s) URL."""

    def __init__(self, url: str) -> None:
        super().__init__(INVALID_URL_MESSAGE)
        self.url = url


class UnsupportedPlatformError(ValueError):
    """Raised when the URL host is not one of the supported video platforms."""

    def __init__(self, hostname: str) -> None:
        super().__init__(UNSUPPORTED_PLATFORM_MESSAGE)
        self.hostname = hostname


@dataclass(frozen=True, slots=True)
class PlatformMatch:
    platform: Platform
    video_id: str | None
    hostname: str

    @property
    def info(self) -> PlatformInfo:
        return PLATFORMS[self.platform]


def _host_matches(hostname: str, domain: str) -> bool:
    return hostname == domain or hostname.endswith("." + domain)


def _parse_hostname(url: str) -> tuple[str, str, str, str]:
    candidate = (url or "").strip()
    try:
        parsed = urlparse(candidate)
        hostname = parsed.hostname
    except ValueError as exc:
        raise InvalidUrlError(candidate) from exc
    if parsed.scheme.lower() not in {"http", "https"} or not hostname:
        raise InvalidUrlError(candidate)
    return candidate, hostname.lower().rstrip("."), parsed.path, parsed.query


def _extract_video_id(platform: Platform, url: str, hostname: str, path: str, query: str) -> str | None:
    if platform is Platform.YOUTUBE:
        if hostname == _YOUTUBE_SHORT_HOST:
            segment = path.lstrip("/").split("/", 1)[0]
            return segment or None
        values = parse_qs(query).get("v")
        if values and values[0]:
            return values[0]
        match = _YOUTUBE_PATH_ID.match(path)
        return match.group(1) if match else None
    if platform is Platform.TIKTOK:
        match = _TIKTOK_VIDEO_ID.search(url)
        return match.group(1) if match else None
    if platform is Platform.INSTAGRAM:
        match = _INSTAGRAM_REEL_ID.search(url)
        return match.group(1) if match else None
    return None


def classify(url: str) -> PlatformMatch:
    """Return the platform and video id for ``url``.

    Raises :class:`InvalidUrlError` for unparseable input and
    :class:`UnsupportedPlatformError` when no platform domain matches.
    """

    candidate, hostname, path, query = _parse_hostname(url)
    for platform, info in PLATFORMS.items():
        if any(_host_matches(hostname, domain) for domain in info.domains):
            video_id = _extract_video_id(platform, candidate, hostname, path, query)
            return PlatformMatch(platform=platform, video_id=video_id, hostname=hostname)
    raise UnsupportedPlatformError(hostname)


def detect_platform(url: str) -> Platform:
    """Lenient variant of :func:`classify` that falls back to ``Platform.OTHER``."""

    try:
        return classify(url).platform
    except (InvalidUrlError, UnsupportedPlatformError):
        return Platform.OTHER


def platform_name(platform: Platform | str) -> str:
    try:
        return PLATFORMS[Platform(platform)].name
    except (KeyError, ValueError):
        return "Other"


def platform_icon(platform: Platform | str) -> str:
    try:
        return PLATFORMS[Platform(platform)].icon
    except (KeyError, ValueError):
        return OTHER_ICON


def default_title(platform: Platform) -> str:
    return f"Video from {platform_name(platform)}"


def default_description(platform: Platform) -> str:
    return f"Shared from {platform_name(platform)}"


def default_thumbnail_url(match: PlatformMatch) -> str | None:
    if match.platform is Platform.YOUTUBE:
        return f"https://img.youtube.com/vi/{match.video_id or 'default'}/hqdefault.jpg"
    return None


__all__ = [
    "INVALID_URL_MESSAGE",
    "UNSUPPORTED_PLATFORM_MESSAGE",
    "InvalidUrlError",
    "PLATFORMS",
    "Platform",
    "PlatformInfo",
    "PlatformMatch",
    "UnsupportedPlatformError",
    "classify",
    "default_description",
    "default_thumbnail_url",
    "default_title",
    "detect_platform",
    "platform_icon",
    "platform_name",
]
