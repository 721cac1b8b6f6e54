"""Summary length and punctuation rules."""

import re

from district_ingest.text import ends_sentence, normalize_whitespace, words

SUMMARY_WORDS = 60
MIN_SUMMARY_WORDS = 12
COPY_CHECK_WORDS = 12

_ELLIPSIS = re.compile(r"\.{3,}|…")
_DANGLING = re.compile(r"[\s,;:\-–—]+$")


def finish_summary(text: str, max_words: int = SUMMARY_WORDS) -> str:
    """Trim text to ``max_words`` and make it end like a sentence.

    Ellipses are removed. If the trimmed text does not end a sentence, it is
    cut back to the last sentence end when that keeps at least half of the
    words; otherwise a period is appended.
    """
    cleaned = normalize_whitespace(_ELLIPSIS.sub(" ", text or ""))
    kept = words(cleaned)[:max_words]
    if not kept:
        return ""
    if not ends_sentence(kept[-1]):
        last_end = max((i for i, w in enumerate(kept) if ends_sentence(w)), default=-1)
        if last_end >= 0 and (last_end + 1) * 2 >= len(kept):
            kept = kept[: last_end + 1]
        else:
            kept[-1] = _DANGLING.sub("", kept[-1])
            if not kept[-1]:
                kept.pop()
            if not kept:
                return ""
            if not ends_sentence(kept[-1]):
                kept[-1] += "."
    return " ".join(kept)


def truncate_summary(body: str, max_words: int = SUMMARY_WORDS) -> str:
    """Deterministic summary: the leading words of the body, properly terminated."""
    return finish_summary(body, max_words)


def looks_copied(summary: str, body: str, n: int = COPY_CHECK_WORDS) -> bool:
    """Whether the first ``n`` words of the summary appear verbatim in the body."""
    lead = " ".join(words(summary.lower())[:n])
    if not lead:
        return False
    return lead in normalize_whitespace(body.lower())
