"""
Versioned cache keys for post lists.

Every cached list key embeds a global version number. Any write to posts,
comments or taxonomy bumps the version, which orphans all previously
cached lists at once; the orphans expire on their own timeout.

Usage:
    from blog.cache import build_list_cache_key, bump_posts_version

    key = build_list_cache_key(request, prefix="blog:api:posts")
    bump_posts_version()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.core.cache import cache
from django.utils import translation

from core.helpers import hash_string

if TYPE_CHECKING:
    from django.http import HttpRequest

logger = logging.getLogger(__name__)

POSTS_VERSION_KEY = "blog:posts:version"


def get_posts_version() -> int:
    version = cache.get(POSTS_VERSION_KEY)
    if version is None:
        cache.add(POSTS_VERSION_KEY, 1, timeout=None)
        version = cache.get(POSTS_VERSION_KEY) or 1
    return int(version)


def bump_posts_version() -> int:
    """Invalidate every cached post list. Returns the new version."""
    try:
        version = cache.incr(POSTS_VERSION_KEY)
    except ValueError:
        # Key missing (evicted or never read)
        version = get_posts_version() + 1
        cache.set(POSTS_VERSION_KEY, version, timeout=None)
    logger.debug(f"Post list cache version bumped to {version}")
    return version


def build_list_cache_key(request: HttpRequest, prefix: str = "blog:posts") -> str:
    """
    Key for a list response: version, active language and absolute URI.

    Cached API lists hold absolute next/previous and image URLs, so scheme
    and host are part of the key.
    """
    path_digest = hash_string(request.build_absolute_uri(), "md5")
    language = translation.get_language() or "en"
    return f"{prefix}:v{get_posts_version()}:{language}:{path_digest}"


def anonymous_list_cache_key(request: HttpRequest) -> str | None:
    """
    Cache key for anonymous visitors only.

    Pages for logged-in users carry CSRF tokens and per-user drafts, so
    they bypass the cache.
    """
    if request.user.is_authenticated:
        return None
    return build_list_cache_key(request, prefix="blog:pages:posts")
