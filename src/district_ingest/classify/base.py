"""Protocol for topic classification."""

from typing import Protocol

from district_ingest.data import Usage


class Classifier(Protocol):
    """Interface for labelling an article with a topic."""

    async def classify(self, text: str) -> tuple[str, Usage]:
        """Classify article text.

        Returns:
            Tuple of (raw label, usage). The label is free text; it is mapped
            onto the closed topic vocabulary by the caller.
        """
        ...
