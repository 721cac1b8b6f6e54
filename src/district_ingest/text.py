"""Plain-text helpers shared by extraction, dedup and derived fields."""

import html
import re
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

_WHITESPACE = re.compile(r"\s+")
_SENTENCE_END = re.compile(r"[.!?][\"')\]]*$")


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    return _WHITESPACE.sub(" ", text).strip()


def strip_html(text: str | None) -> str:
    """Remove tags, scripts and styles; unescape entities; collapse whitespace."""
    if not text:
        return ""
    if "<" not in text:
        return normalize_whitespace(html.unescape(text))
    soup = BeautifulSoup(text, "html.parser")
    for node in soup(["script", "style"]):
        node.decompose()
    return normalize_whitespace(soup.get_text(" "))


def words(text: str) -> list[str]:
    """Whitespace-separated words of ``text``."""
    return normalize_whitespace(text).split()


def word_count(text: str) -> int:
    return len(words(text))


def trim_to_words(text: str, max_words: int) -> str:
    """First ``max_words`` words of ``text``, whitespace normalized."""
    return " ".join(words(text)[:max_words])


def ends_sentence(word: str) -> bool:
    """Whether a word closes a sentence (``.``, ``!`` or ``?`` plus closing quotes)."""
    return bool(_SENTENCE_END.search(word))
