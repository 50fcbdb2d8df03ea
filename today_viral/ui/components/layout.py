"""Layout building blocks shared across pages."""
from __future__ import annotations

from markupsafe import Markup, escape

from today_viral.constants import CREATE_ROUTE, FEED_ROUTE, LANDING_ROUTE, PROFILE_ROUTE, SIGN_IN_ROUTE

NAV_LINKS = (
    ("Home", LANDING_ROUTE),
    ("Go Viral", FEED_ROUTE),
)


def _link(label: str, href: str, *, active: str | None, extra: str = "") -> str:
    tone = "text-rose-400" if active == href else "text-slate-400 hover:text-white"
    return f"<a href=\"{href}\" class=\"px-3 py-2 text-sm font-medium transition {tone}\"{extra}>{escape(label)}</a>"


def navbar(*, active: str | None = None) -> Markup:
    """Bottom navigation bar; auth-only links are toggled by the page script once a session is known."""

    links = [_link(label, href, active=active) for label, href in NAV_LINKS]
    links.append(_link("Create", CREATE_ROUTE, active=active, extra=' data-auth="signed-in" hidden'))
    links.append(_link("Profile", PROFILE_ROUTE, active=active, extra=' data-auth="signed-in" hidden'))
    links.append(_link("Sign In", SIGN_IN_ROUTE, active=active, extra=' data-auth="signed-out"'))
    return Markup(
        f"""
        <nav class=\"fixed inset-x-0 bottom-0 z-40 border-t border-slate-800/60 bg-black/90 backdrop-blur\">
            <div class=\"mx-auto flex max-w-md items-center justify-around py-2\">{''.join(links)}</div>
        </nav>
        """
    )


__all__ = ["NAV_LINKS", "navbar"]
