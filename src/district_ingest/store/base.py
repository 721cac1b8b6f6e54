"""Protocol for article persistence."""

from typing import Protocol

from district_ingest.data import ArticleRecord, InsertOutcome


class ArticleStore(Protocol):
    """Interface for the persistent article collection.

    ``source_url`` is unique: inserting a record whose canonical URL is
    already stored yields ``InsertOutcome.CONFLICT``.
    """

    async def insert(self, record: ArticleRecord) -> InsertOutcome:
        """Insert one record.

        Returns:
            INSERTED, CONFLICT on a unique violation, ERROR when the store is
            unavailable.
        """
        ...

    async def query(
        self,
        *,
        source_url: str | None = None,
        limit: int = 50,
    ) -> list[ArticleRecord]:
        """Return stored records, newest first.

        Args:
            source_url: If given, only records with this canonical URL.
            limit: Maximum number of records.

        Raises:
            Exception: When the store is unavailable. Callers decide how to
                degrade.
        """
        ...
