"""Article link discovery on publisher homepages."""

import logging
import re
from dataclasses import dataclass
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from district_ingest.url import absolute_url, normalize_url, same_host, strip_query

logger = logging.getLogger(__name__)

MAX_ANCHORS = 1000
DEFAULT_MAX_LINKS = 12


@dataclass(frozen=True)
class LinkPattern:
    """A labelled path heuristic. ``regex`` is matched against the lowercased URL path."""

    label: str
    regex: re.Pattern[str]


def _pattern(label: str, regex: str) -> LinkPattern:
    return LinkPattern(label=label, regex=re.compile(regex))


ARTICLE_PATTERNS: tuple[LinkPattern, ...] = (
    _pattern("dated-path", r"/(?:19|20)\d{2}/\d{1,2}/(?:\d{1,2}/)?[^/]+"),
    _pattern("numeric-slug", r"-\d{3,}(?:\.html?)?/?$"),
    _pattern("numeric-id", r"/\d{4,}(?:/|$)"),
    _pattern("node", r"/node/\d+"),
    _pattern(
        "article-segment",
        r"/(?:articles?|news|actualites?|story|stories|post)/[^/]+",
    ),
)

EXCLUDED_PATTERNS: tuple[LinkPattern, ...] = (
    _pattern("category", r"/(?:category|categories|rubrique|section)(?:/|$)"),
    _pattern("tag", r"/tags?(?:/|$)"),
    _pattern("author", r"/(?:author|auteur)(?:/|$)"),
    _pattern("pagination", r"/page/\d+"),
    _pattern("search", r"/(?:search|recherche)(?:/|$)"),
    _pattern("feed", r"/(?:feed|rss)(?:/|\.xml|$)"),
    _pattern(
        "account",
        r"/(?:login|logout|register|signin|signup|account|my-account|wp-login\.php)(?:/|$)",
    ),
    _pattern("wp-internal", r"/wp-(?:admin|content|includes|json)(?:/|$)"),
    _pattern("static-asset", r"\.(?:jpe?g|png|gif|webp|svg|ico|pdf|mp3|mp4|zip|css|js)$"),
)

FALLBACK_SELECTORS = (
    ".top-news",
    ".headline",
    ".article-list",
    ".news-list",
    ".lead",
    ".latest",
)

_SKIPPED_SCHEMES = ("mailto:", "javascript:", "tel:", "#")


def _path(url: str) -> str:
    try:
        return urlparse(url).path.lower()
    except ValueError:
        return ""


def _first_match(url: str, patterns: tuple[LinkPattern, ...]) -> str | None:
    path = _path(url)
    for pattern in patterns:
        if pattern.regex.search(path):
            return pattern.label
    return None


def match_article_pattern(url: str) -> str | None:
    """Label of the first article heuristic the URL path satisfies, else None."""
    return _first_match(url, ARTICLE_PATTERNS)


def match_excluded_pattern(url: str) -> str | None:
    """Label of the first exclusion rule the URL path hits, else None."""
    return _first_match(url, EXCLUDED_PATTERNS)


def is_listing_url(url: str) -> bool:
    """Whether the URL points at a category, tag, author or other non-article page."""
    return match_excluded_pattern(url) is not None


def _resolve(href: str | None, base_url: str) -> str | None:
    href = (href or "").strip()
    if not href or href.lower().startswith(_SKIPPED_SCHEMES):
        return None
    url = strip_query(absolute_url(href, base_url))
    if not url.lower().startswith(("http://", "https://")):
        return None
    if not same_host(url, base_url) or is_listing_url(url):
        return None
    return url


def discover_links(html: str, base_url: str, max_links: int = DEFAULT_MAX_LINKS) -> list[str]:
    """Find article-like links on a homepage.

    Only same-host http(s) links are kept, with query and fragment removed.
    Links must match one of ``ARTICLE_PATTERNS`` and none of
    ``EXCLUDED_PATTERNS``. When nothing qualifies, anchors inside the
    ``FALLBACK_SELECTORS`` blocks are accepted without the article check.

    Args:
        html: Homepage markup.
        base_url: URL the page was fetched from.
        max_links: Maximum number of links returned.

    Returns:
        Absolute URLs in document order, without duplicates.
    """
    if not html or max_links <= 0:
        return []
    soup = BeautifulSoup(html, "html.parser")
    homepage = normalize_url(base_url)

    found: dict[str, str] = {}
    for anchor in soup.find_all("a", href=True, limit=MAX_ANCHORS):
        url = _resolve(anchor.get("href"), base_url)
        if url is None or match_article_pattern(url) is None:
            continue
        key = normalize_url(url)
        if key != homepage and key not in found:
            found[key] = url
            if len(found) >= max_links:
                break

    if not found:
        for selector in FALLBACK_SELECTORS:
            for anchor in soup.select(f"{selector} a[href]")[:MAX_ANCHORS]:
                url = _resolve(anchor.get("href"), base_url)
                if url is None:
                    continue
                key = normalize_url(url)
                if key != homepage and key not in found:
                    found[key] = url
            if found:
                logger.info(f"Using fallback selector {selector!r} for {base_url}")
                break

    return list(found.values())[:max_links]
