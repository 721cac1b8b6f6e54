"""Deterministic headline generator."""

from district_ingest.data import Headline, Usage
from district_ingest.text import trim_to_words


class LeadWordsHeadlineGenerator:
    """Use the leading words of the title and the summary as the headline pair.

    Args:
        words: Words kept from each part.
    """

    def __init__(self, words: int = 3) -> None:
        self._words = words

    async def generate(self, title: str, summary: str) -> tuple[Headline, Usage]:
        return (
            Headline(
                headline=trim_to_words(title, self._words),
                subheadline=trim_to_words(summary, self._words),
            ),
            Usage(),
        )
