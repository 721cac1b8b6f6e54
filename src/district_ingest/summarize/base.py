"""Protocol for article summarization."""

from typing import Protocol

from district_ingest.data import Usage


class Summarizer(Protocol):
    """Interface for producing a short rewritten summary of an article."""

    async def summarize(self, text: str, *, max_words: int) -> tuple[str, Usage]:
        """Summarize article body text.

        Args:
            text: Plain article body.
            max_words: Target upper bound on summary length.

        Returns:
            Tuple of (raw summary text, usage). Callers enforce length and
            punctuation rules.
        """
        ...
