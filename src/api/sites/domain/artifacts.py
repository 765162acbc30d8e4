"""Derived artifact generators.

Pure, deterministic functions over a resolution outcome. Output is
byte-exact: callers serve it as-is.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sites.domain.value_objects import ResolvedSiteConfig, SiteNotFound

DISALLOW_ALL_ROBOTS = "User-agent: *\nDisallow: /"


def render_robots_txt(resolution: ResolvedSiteConfig | SiteNotFound) -> str:
    """Render robots.txt for a site.

    Unknown and non-public sites disallow all crawling with no sitemap
    reference. LIVE sites allow everything and point at their sitemap.
    """
    if isinstance(resolution, SiteNotFound) or not resolution.is_public:
        return DISALLOW_ALL_ROBOTS
    return f"User-agent: *\nAllow: /\n\nSitemap: {resolution.base_url}/sitemap.xml"


def render_theme_variables(theme: Mapping[str, Any] | None) -> str:
    """Render CSS custom property declarations for a theme map.

    Keys are emitted in the map's insertion order and values are passed
    through verbatim; validating them is the writer's responsibility.

    Example:
        >>> render_theme_variables({"primary": "#ff0000", "radius": "4px"})
        '--primary: #ff0000; --radius: 4px;'
    """
    if not theme:
        return ""
    return " ".join(f"--{key}: {value};" for key, value in theme.items())


def render_theme_stylesheet(theme: Mapping[str, Any] | None) -> str:
    """Wrap the theme variables in a ``:root`` rule, or nothing without a theme."""
    declarations = render_theme_variables(theme)
    if not declarations:
        return ""
    return f":root {{ {declarations} }}"
