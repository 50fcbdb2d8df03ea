"""Card components for the video feed and profile grids."""
from __future__ import annotations

from markupsafe import Markup, escape

from today_viral.platforms import platform_icon
from today_viral.schemas import PostResponse


def _initial(username: str | None) -> str:
    return (username or "U")[:1].upper()


def video_card(post: PostResponse, *, auto_play: bool = False) -> Markup:
    """Full-height video card; playback and interactions are driven by the page script."""

    username = post.author.username if post.author else ""
    full_name = (post.author.full_name if post.author else None) or ""
    poster = f" poster=\"{escape(post.thumbnail_url)}\"" if post.thumbnail_url else ""
    autoplay = " data-autoplay=\"true\"" if auto_play else ""
    liked = "true" if post.viewer_has_liked else "false"
    return Markup(
        f"""
        <article class=\"relative flex min-h-screen flex-col bg-black\" data-post-id=\"{post.id}\" data-liked=\"{liked}\"{autoplay}>
            <div class=\"relative flex flex-1 items-center justify-center\">
                <video src=\"{escape(post.video_url)}\" class=\"h-full max-h-screen w-full object-contain\" loop muted playsinline{poster}></video>
            </div>
            <div class=\"absolute inset-x-0 bottom-0 p-6 text-white\">
                <span class=\"rounded-full bg-white/20 px-2 py-1 text-sm\">{platform_icon(post.platform)} {escape(post.platform.value)}</span>
                <h3 class=\"mt-2 line-clamp-2 text-lg font-semibold\">{escape(post.title)}</h3>
                <p class=\"line-clamp-2 text-sm text-gray-300\">{escape(post.description or '')}</p>
                <div class=\"mt-4 flex items-center gap-3\">
                    <div class=\"flex h-10 w-10 items-center justify-center rounded-full bg-rose-500 font-bold\">{escape(_initial(username))}</div>
                    <div>
                        <p class=\"font-semibold\">@{escape(username)}</p>
                        <p class=\"text-sm text-gray-300\">{escape(full_name)}</p>
                    </div>
                </div>
                <footer class=\"mt-6 flex items-center gap-6 text-xs\">
                    <button class=\"like-btn\" data-role=\"like\">❤ <span data-role=\"likes-count\">{post.likes_count}</span></button>
                    <button class=\"comment-btn\" data-role=\"comments\">💬 <span data-role=\"comments-count\">{post.comments_count}</span></button>
                    <button class=\"share-btn\" data-role=\"share\">↗ Share</button>
                    <button class=\"ml-auto\" data-role=\"mute\">🔇</button>
                </footer>
            </div>
        </article>
        """
    )


__all__ = ["video_card"]
