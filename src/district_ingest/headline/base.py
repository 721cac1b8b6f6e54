"""Protocol for headline generation."""

from typing import Protocol

from district_ingest.data import Headline, Usage


class HeadlineGenerator(Protocol):
    """Interface for producing a short headline and subheadline."""

    async def generate(self, title: str, summary: str) -> tuple[Headline, Usage]:
        """Generate a headline pair.

        Args:
            title: Article title.
            summary: Derived summary.

        Returns:
            Tuple of (headline pair, usage).
        """
        ...
