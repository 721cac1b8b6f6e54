"""URL handling utilities."""

from __future__ import annotations

import re
from urllib.parse import urljoin, urlparse, urlsplit, urlunsplit

_TRAILING = re.compile(r"[\s/]+$")


def normalize_url(url: str) -> str:
    """Canonicalize a URL into the key used for deduplication.

    Drops the query string and fragment, lowercases the result and removes
    trailing slashes. Scheme-relative or unparseable input is handled as a
    raw string with the same rules, so any string maps to a string.

    Args:
        url: Raw URL as found in a feed or page.

    Returns:
        The canonical URL.
    """
    raw = url.strip()
    try:
        parts = urlsplit(raw)
        if parts.scheme and parts.netloc:
            raw = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
    except ValueError:
        pass
    return _TRAILING.sub("", strip_query(raw).lower()).strip()


def strip_query(url: str) -> str:
    """Remove fragment and query from a URL, keeping its case."""
    return url.split("#", 1)[0].split("?", 1)[0]


def absolute_url(href: str, base: str) -> str:
    """Resolve ``href`` against ``base``; returns ``href`` unchanged if that fails."""
    try:
        return urljoin(base, href.strip())
    except ValueError:
        return href


def host_of(url: str) -> str:
    """Lowercased hostname without a leading ``www.``, or ``""``."""
    try:
        host = (urlparse(url).hostname or "").lower()
    except ValueError:
        return ""
    if host.startswith("www."):
        host = host[4:]
    return host


def same_host(url: str, other: str) -> bool:
    """Whether two URLs point at the same site, ignoring a ``www.`` prefix."""
    host = host_of(url)
    return bool(host) and host == host_of(other)

