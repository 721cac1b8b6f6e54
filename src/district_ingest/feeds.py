"""RSS and Atom feed parsing, probing and image matching."""

import logging
import re
from typing import Any

import feedparser

from district_ingest.data import FeedEntry
from district_ingest.dates import to_iso_utc
from district_ingest.text import strip_html
from district_ingest.url import absolute_url, normalize_url

logger = logging.getLogger(__name__)

FEED_PROBE_PATHS = (
    "/rss",
    "/rss.xml",
    "/feed",
    "/feed.xml",
    "/feeds",
    "/feeds/rss.xml",
    "/index.xml",
    "/atom.xml",
    "/rss/all.xml",
    "/rss/latest.xml",
)

_FEED_ROOT = re.compile(r"<(rss|feed|rdf:rdf)[\s>]", re.IGNORECASE)
_IMAGE_EXTENSION = re.compile(r"\.(jpe?g|png|gif|webp|avif)(\?|$)", re.IGNORECASE)


def feed_probe_urls(homepage_url: str) -> list[str]:
    """Well-known feed locations for a site, in probing order."""
    return [absolute_url(path, homepage_url) for path in FEED_PROBE_PATHS]


def looks_like_feed(text: str | None) -> bool:
    """Cheap check that a fetched body is RSS, Atom or RDF rather than HTML."""
    if not text:
        return False
    return bool(_FEED_ROOT.search(text[:4096]))


def _entry_link(entry: Any) -> str:
    link = (entry.get("link") or "").strip()
    guid = (entry.get("id") or "").strip()
    # feedparser copies a permalink guid into ``link``; only trust it if URL-shaped.
    if link and not (link == guid and entry.get("guidislink")):
        return link
    if guid.startswith(("http://", "https://", "/")):
        return guid
    return ""


def _entry_description(entry: Any) -> str | None:
    raw = entry.get("summary") or entry.get("description")
    if not raw:
        content = entry.get("content") or []
        if content:
            raw = content[0].get("value")
    text = strip_html(raw)
    return text or None


def _entry_image(entry: Any) -> str | None:
    for enclosure in entry.get("enclosures") or []:
        href = enclosure.get("href") or enclosure.get("url")
        kind = (enclosure.get("type") or "").lower()
        if href and (kind.startswith("image/") or (not kind and _IMAGE_EXTENSION.search(href))):
            return href
    for media in entry.get("media_content") or []:
        url = media.get("url")
        medium = (media.get("medium") or "").lower()
        kind = (media.get("type") or "").lower()
        if url and (medium == "image" or kind.startswith("image/") or not (medium or kind)):
            return url
    for thumb in entry.get("media_thumbnail") or []:
        if thumb.get("url"):
            return thumb["url"]
    return None


def parse_feed(xml: str | bytes | None, base_url: str) -> list[FeedEntry]:
    """Parse an RSS 2.0 or Atom document into feed entries.

    Entries keep feed order; entries without a usable link are skipped.
    Relative links and images are resolved against ``base_url``. Malformed
    or empty input yields an empty list.

    Args:
        xml: The feed document.
        base_url: URL the document was fetched from.

    Returns:
        Parsed entries.
    """
    if not xml:
        return []
    data = xml.encode("utf-8") if isinstance(xml, str) else xml
    try:
        parsed = feedparser.parse(
            data, response_headers={"content-type": "application/xml; charset=utf-8"}
        )
    except Exception:
        logger.warning(f"Could not parse feed from {base_url}", exc_info=True)
        return []

    entries: list[FeedEntry] = []
    for entry in parsed.entries:
        link = _entry_link(entry)
        if not link:
            continue
        image = _entry_image(entry)
        entries.append(
            FeedEntry(
                title=strip_html(entry.get("title")),
                link=absolute_url(link, base_url),
                description=_entry_description(entry),
                image_url=absolute_url(image, base_url) if image else None,
                published_at=to_iso_utc(entry.get("published") or entry.get("updated")),
            )
        )
    return entries


def _slug(canonical_url: str) -> str:
    path = canonical_url.split("://", 1)[-1]
    if "/" not in path:
        return ""
    return path.rsplit("/", 1)[-1]


def feed_image_for(url: str, entries: list[FeedEntry]) -> str | None:
    """Find the feed image for an article URL.

    Matches on canonical URL first, then on the trailing path slug so that
    feed links differing only in host prefix or section still pair up.
    """
    canonical = normalize_url(url)
    with_images = [e for e in entries if e.image_url]
    for entry in with_images:
        if normalize_url(entry.link) == canonical:
            return entry.image_url
    slug = _slug(canonical)
    if not slug:
        return None
    for entry in with_images:
        if _slug(normalize_url(entry.link)) == slug:
            return entry.image_url
    return None
