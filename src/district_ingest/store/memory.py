"""In-process article store."""

import asyncio

from district_ingest.data import ArticleRecord, InsertOutcome


class MemoryArticleStore:
    """Keep records in a list. Useful for dry runs and tests.

    Args:
        records: Optional initial records, oldest first.
    """

    def __init__(self, records: list[ArticleRecord] | None = None) -> None:
        self._records: list[ArticleRecord] = list(records or [])
        self._lock = asyncio.Lock()

    @property
    def records(self) -> list[ArticleRecord]:
        """Stored records, oldest first."""
        return list(self._records)

    async def insert(self, record: ArticleRecord) -> InsertOutcome:
        async with self._lock:
            if any(r.source_url == record.source_url for r in self._records):
                return InsertOutcome.CONFLICT
            self._records.append(record)
            return InsertOutcome.INSERTED

    async def query(
        self,
        *,
        source_url: str | None = None,
        limit: int = 50,
    ) -> list[ArticleRecord]:
        newest_first = reversed(self._records)
        if source_url is not None:
            matches = [r for r in newest_first if r.source_url == source_url]
        else:
            matches = list(newest_first)
        return matches[: max(limit, 0)]
