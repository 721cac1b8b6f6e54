"""Duplicate detection by canonical URL and title token overlap."""

import html
import logging
import re
import unicodedata
from collections.abc import Iterable

from district_ingest.data import UNTITLED
from district_ingest.store.base import ArticleStore

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.55
DEFAULT_RECENT_LIMIT = 500

_TAG = re.compile(r"<[^>]*>")
_SMART_QUOTES = str.maketrans({"‘": "'", "’": "'", "“": '"', "”": '"'})


def _strip_punctuation(text: str) -> str:
    return "".join(" " if unicodedata.category(ch).startswith("P") else ch for ch in text)


def tokenize_title(text: str | None) -> set[str]:
    """Lowercased word tokens of a title with markup and punctuation removed."""
    if not text:
        return set()
    cleaned = _TAG.sub(" ", html.unescape(text)).translate(_SMART_QUOTES).lower()
    return set(_strip_punctuation(cleaned).split())


def token_overlap_ratio(a: set[str], b: set[str]) -> float:
    """Shared tokens over the size of the smaller set; 0.0 if either is empty."""
    if not a or not b:
        return 0.0
    return len(a & b) / min(len(a), len(b))


def title_matches_any(title: str, titles: Iterable[str], threshold: float) -> bool:
    """Whether ``title`` overlaps any of ``titles`` by at least ``threshold``."""
    tokens = tokenize_title(title)
    if not tokens:
        return False
    return any(token_overlap_ratio(tokens, tokenize_title(other)) >= threshold for other in titles)


class DedupEngine:
    """Check candidates against stored articles.

    Store failures are logged and reported as "not a duplicate" so that an
    unavailable store does not stop ingestion.

    Args:
        store: Article store to query.
        threshold: Default title overlap threshold.
        recent_limit: Default number of recent titles compared against.
    """

    def __init__(
        self,
        store: ArticleStore,
        threshold: float = DEFAULT_THRESHOLD,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ) -> None:
        self._store = store
        self._threshold = threshold
        self._recent_limit = recent_limit

    async def is_duplicate_url(self, canonical_url: str) -> bool:
        try:
            existing = await self._store.query(source_url=canonical_url, limit=1)
        except Exception:
            logger.warning(f"URL dedup lookup failed for {canonical_url}", exc_info=True)
            return False
        return bool(existing)

    async def is_duplicate_title(
        self,
        title: str,
        threshold: float | None = None,
        recent_limit: int | None = None,
    ) -> bool:
        """Compare a title with the most recently stored titles.

        Empty titles and the "Untitled" placeholder never count as duplicates.
        """
        if not title.strip() or title.strip() == UNTITLED:
            return False
        limit = self._recent_limit if recent_limit is None else recent_limit
        if limit <= 0:
            return False
        try:
            recent = await self._store.query(limit=limit)
        except Exception:
            logger.warning("Title dedup lookup failed", exc_info=True)
            return False
        return title_matches_any(
            title,
            (record.title for record in recent),
            self._threshold if threshold is None else threshold,
        )
