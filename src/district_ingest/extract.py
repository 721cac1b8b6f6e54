"""Structured content extraction from article pages."""

import logging
import re

from bs4 import BeautifulSoup, Tag

from district_ingest.data import UNTITLED, ExtractedArticle
from district_ingest.dates import to_iso_utc
from district_ingest.discovery import is_listing_url
from district_ingest.fetch import Fetcher
from district_ingest.text import normalize_whitespace, strip_html
from district_ingest.url import absolute_url

logger = logging.getLogger(__name__)

MIN_BODY_CHARS = 100
MIN_SELECTOR_PARAGRAPHS = 3

ARTICLE_SELECTORS = (
    "article",
    ".article",
    ".post",
    ".post-content",
    ".entry-content",
    ".news-content",
    ".story-content",
    ".node__content",
    ".node-content",
    ".content-body",
    ".content-area",
    ".field--name-body",
    "#content",
    "#main-content",
)

NOISE_SELECTORS = "script, style, noscript, .advert, .ads, .share, .social"
CHROME_SELECTORS = "script, style, noscript, nav, header, footer, aside, form"

_BOILERPLATE = re.compile(
    r"cookie|copyright|©|all rights reserved|subscribe to our newsletter", re.IGNORECASE
)


def _meta(soup: BeautifulSoup, *, prop: str | None = None, name: str | None = None) -> str:
    attrs = {"property": prop} if prop else {"name": name}
    tag = soup.find("meta", attrs=attrs)
    if isinstance(tag, Tag):
        return normalize_whitespace(str(tag.get("content") or ""))
    return ""


def _first_text(soup: BeautifulSoup, selector: str) -> str:
    tag = soup.select_one(selector)
    return strip_html(tag.get_text(" ")) if tag else ""


def _title(soup: BeautifulSoup) -> str:
    for candidate in (
        _meta(soup, prop="og:title"),
        _first_text(soup, "h1"),
        _first_text(soup, "title"),
    ):
        title = strip_html(candidate)
        if title:
            return title
    return UNTITLED


def _description(soup: BeautifulSoup) -> str:
    return strip_html(
        _meta(soup, prop="og:description")
        or _meta(soup, name="description")
        or _meta(soup, name="twitter:description")
    )


def _image(soup: BeautifulSoup, base_url: str) -> str | None:
    candidates = [_meta(soup, prop="og:image"), _meta(soup, name="twitter:image")]
    for selector in ("figure img[src]", "img[src]"):
        tag = soup.select_one(selector)
        if tag:
            candidates.append(str(tag.get("src") or "").strip())
    for src in candidates:
        if src and not src.lower().startswith("data:"):
            return absolute_url(src, base_url)
    return None


def _published_at(soup: BeautifulSoup) -> str | None:
    values = [
        _meta(soup, prop="article:published_time"),
        _meta(soup, name="pubdate"),
    ]
    for tag in soup.select("[itemprop=datePublished]"):
        values.append(str(tag.get("content") or tag.get("datetime") or ""))
    for tag in soup.select("time[datetime]"):
        values.append(str(tag.get("datetime") or ""))
    for value in values:
        parsed = to_iso_utc(value)
        if parsed:
            return parsed
    return None


def _paragraphs(container: Tag, min_length: int, seen: set[str]) -> list[str]:
    found: list[str] = []
    for p in container.find_all("p"):
        text = normalize_whitespace(p.get_text(" "))
        if len(text) <= min_length or _BOILERPLATE.search(text) or text in seen:
            continue
        seen.add(text)
        found.append(text)
    return found


def _body_text(soup: BeautifulSoup) -> str:
    for selector in ARTICLE_SELECTORS:
        blocks = soup.select(selector)
        if not blocks:
            continue
        seen: set[str] = set()
        paragraphs: list[str] = []
        for block in blocks:
            for noise in block.select(NOISE_SELECTORS):
                noise.decompose()
            paragraphs.extend(_paragraphs(block, 25, seen))
        if len(paragraphs) >= MIN_SELECTOR_PARAGRAPHS:
            return "\n\n".join(paragraphs)

    for noise in soup.select(NOISE_SELECTORS):
        noise.decompose()
    return "\n\n".join(_paragraphs(soup, 30, set()))


def _visible_text(soup: BeautifulSoup) -> str:
    body = soup.body or soup
    for chrome in body.select(CHROME_SELECTORS):
        chrome.decompose()
    return normalize_whitespace(body.get_text(" "))


def extract_article_from_html(html: str, base_url: str) -> ExtractedArticle | None:
    """Pull title, description, image, date and body text out of an article page.

    Body text comes from the first of ``ARTICLE_SELECTORS`` yielding at least
    three real paragraphs, else from every long paragraph on the page, then
    the meta description, then the visible page text. Pages whose body is
    still shorter than ``MIN_BODY_CHARS`` are rejected.

    Args:
        html: Page markup.
        base_url: URL used to resolve relative image links.

    Returns:
        The extracted article, or None if the page fails the quality gate.
    """
    if not html:
        return None
    soup = BeautifulSoup(html, "html.parser")

    title = _title(soup)
    description = _description(soup)
    image_url = _image(soup, base_url)
    published_at = _published_at(soup)

    body = _body_text(soup)
    if len(body) < MIN_BODY_CHARS and len(description) >= MIN_BODY_CHARS:
        body = description
    if len(body) < MIN_BODY_CHARS:
        body = _visible_text(soup)
    if len(body) < MIN_BODY_CHARS:
        return None

    return ExtractedArticle(
        title=title,
        description=description,
        body_text=body,
        image_url=image_url,
        published_at=published_at,
    )


class ArticleExtractor:
    """Fetch an article URL and extract its content.

    Args:
        fetcher: Fetcher used to download pages.
    """

    def __init__(self, fetcher: Fetcher) -> None:
        self._fetcher = fetcher

    async def extract(self, url: str, base_url: str, *, timeout: float) -> ExtractedArticle | None:
        """Fetch and extract one article.

        Args:
            url: Article URL.
            base_url: Site URL used to resolve relative links.
            timeout: Fetch deadline in seconds.

        Returns:
            The extracted article, or None for listing pages, fetch failures,
            parse failures and pages failing the quality gate.
        """
        if is_listing_url(url):
            logger.info(f"Skipping listing page {url}")
            return None
        try:
            html = await self._fetcher.fetch(url, timeout=timeout)
            if html is None:
                return None
            return extract_article_from_html(html, base_url)
        except Exception:
            logger.exception(f"Failed to extract article from {url}")
            return None
