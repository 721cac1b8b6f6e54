"""Pipeline protocol for news ingestion."""

from typing import Protocol

from district_ingest.data import IngestResult, SourceDescriptor
from district_ingest.options import IngestOptions


class Pipeline(Protocol):
    """Interface for ingestion runs over a list of publishers."""

    async def run(
        self,
        sources: list[SourceDescriptor],
        options: IngestOptions | None = None,
    ) -> IngestResult:
        """Ingest new articles from the given sources.

        Args:
            sources: Publishers in priority order.
            options: Run tunables; defaults apply when None.

        Returns:
            Structured report of the run. Never raises.
        """
        ...
