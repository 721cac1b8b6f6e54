"""Article storage."""

from district_ingest.store.base import ArticleStore
from district_ingest.store.memory import MemoryArticleStore
from district_ingest.store.sql import NewsArticleRow, SqlArticleStore

__all__ = [
    "ArticleStore",
    "MemoryArticleStore",
    "NewsArticleRow",
    "SqlArticleStore",
]
