"""Tests for the article stores."""

from pathlib import Path

import pytest
from helpers import stored_record

from district_ingest.data import Headline, InsertOutcome, Topic
from district_ingest.store import ArticleStore, MemoryArticleStore, SqlArticleStore


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> ArticleStore:
    if request.param == "memory":
        return MemoryArticleStore()
    return SqlArticleStore(f"sqlite:///{tmp_path / 'articles.db'}")


async def test_insert_then_conflict(store: ArticleStore) -> None:
    record = stored_record("https://news.example/news/a")
    assert await store.insert(record) == InsertOutcome.INSERTED
    assert await store.insert(stored_record("https://news.example/news/a", "Other")) == (
        InsertOutcome.CONFLICT
    )


async def test_query_newest_first_with_limit(store: ArticleStore) -> None:
    for i in range(3):
        await store.insert(stored_record(f"https://news.example/news/{i}", f"Title {i}"))

    recent = await store.query(limit=2)

    assert [r.title for r in recent] == ["Title 2", "Title 1"]


async def test_query_by_source_url(store: ArticleStore) -> None:
    await store.insert(stored_record("https://news.example/news/a", "A"))
    await store.insert(stored_record("https://news.example/news/b", "B"))

    found = await store.query(source_url="https://news.example/news/b")

    assert [r.title for r in found] == ["B"]
    assert await store.query(source_url="https://news.example/news/c") == []


async def test_zero_limit(store: ArticleStore) -> None:
    await store.insert(stored_record("https://news.example/news/a"))
    assert await store.query(limit=0) == []


async def test_sql_round_trips_all_fields(tmp_path: Path) -> None:
    store = SqlArticleStore(f"sqlite:///{tmp_path / 'articles.db'}")
    record = stored_record("https://news.example/news/a")
    record = type(record)(
        title="Budget passes",
        summary="Parliament approved the budget.",
        source_url="https://news.example/news/a",
        source_name="Example",
        topic=Topic.POLITICS,
        categories=("Top Stories", "Finance"),
        headline=Headline("Budget passes", "Opposition walks out"),
        image_url="https://cdn.example/a.jpg",
        published_at="2025-03-04T04:30:00+00:00",
    )
    await store.insert(record)

    [loaded] = await store.query(source_url=record.source_url)

    assert loaded == record
    store.dispose()


async def test_sql_persists_across_instances(tmp_path: Path) -> None:
    url = f"sqlite:///{tmp_path / 'articles.db'}"
    first = SqlArticleStore(url)
    await first.insert(stored_record("https://news.example/news/a"))
    first.dispose()

    second = SqlArticleStore(url)
    assert len(await second.query()) == 1
    assert await second.insert(stored_record("https://news.example/news/a")) == (
        InsertOutcome.CONFLICT
    )
    second.dispose()


async def test_sql_in_memory_database() -> None:
    store = SqlArticleStore("sqlite://")
    outcome = await store.insert(stored_record("https://news.example/news/a"))
    assert outcome == InsertOutcome.INSERTED
    assert len(await store.query()) == 1


def test_memory_store_records_oldest_first() -> None:
    first = stored_record("https://news.example/news/a", "A")
    second = stored_record("https://news.example/news/b", "B")
    store = MemoryArticleStore([first, second])
    assert [r.title for r in store.records] == ["A", "B"]
