"""Ingestion orchestrator."""

import asyncio
import dataclasses
import logging
import time
from dataclasses import dataclass, field

from district_ingest.data import (
    UNTITLED,
    ArticleRecord,
    Candidate,
    CandidateOutcome,
    ExtractedArticle,
    FeedEntry,
    IngestResult,
    InsertOutcome,
    SourceDescriptor,
    SourceDiagnostic,
    Usage,
)
from district_ingest.dedup import DedupEngine
from district_ingest.derive import DerivedFieldPipeline
from district_ingest.discovery import discover_links
from district_ingest.extract import ArticleExtractor
from district_ingest.feeds import feed_image_for, feed_probe_urls, looks_like_feed, parse_feed
from district_ingest.fetch import Fetcher
from district_ingest.options import IngestOptions
from district_ingest.run_logger import RunLogger
from district_ingest.store import ArticleStore
from district_ingest.url import normalize_url, strip_query

logger = logging.getLogger(__name__)


@dataclass
class _RunState:
    """Mutable state shared by every source of one run."""

    options: IngestOptions
    derived: DerivedFieldPipeline
    seen: set[str] = field(default_factory=set)
    inserted: list[ArticleRecord] = field(default_factory=list)
    usage: Usage = field(default_factory=Usage)
    write_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def done(self) -> bool:
        return self.options.mode == "single" and bool(self.inserted)


class IngestionOrchestrator:
    """Run discovery, extraction, dedup, derivation and insertion over sources.

    Flow per source, in priority order:
    1. Discover candidates: feed (configured or probed) links first, then
       homepage links, merged by canonical URL and capped.
    2. For each candidate: skip URLs already seen this run or already
       stored, extract the page, enrich it from its feed entry, skip near
       duplicate titles, derive summary/topic/headline/tags, insert.

    In ``single`` mode the run stops after the first successful insert and
    sources are processed one at a time. In ``batch`` mode every accepted
    candidate is inserted and up to ``max_concurrent_sources`` sources run
    concurrently; inserts then go through one writer lock with dedup
    re-checked.

    Args:
        fetcher: Fetcher used for feeds, homepages and articles.
        store: Persistent article store.
        derived: Derived-field pipeline.
        extractor: Article extractor (defaults to one using ``fetcher``).
        dedup: Dedup engine (defaults to one over ``store``).
        run_logger: Optional RunLogger for per-source records.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        store: ArticleStore,
        derived: DerivedFieldPipeline,
        *,
        extractor: ArticleExtractor | None = None,
        dedup: DedupEngine | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._store = store
        self._derived = derived
        self._extractor = extractor or ArticleExtractor(fetcher)
        self._dedup = dedup or DedupEngine(store)
        self._run_logger = run_logger

    async def aclose(self) -> None:
        """Close the fetcher's connections and release the store's pool."""
        aclose = getattr(self._fetcher, "aclose", None)
        if callable(aclose):
            await aclose()
        dispose = getattr(self._store, "dispose", None)
        if callable(dispose):
            dispose()

    async def run(
        self,
        sources: list[SourceDescriptor],
        options: IngestOptions | None = None,
    ) -> IngestResult:
        """Ingest new articles from ``sources``.

        Args:
            sources: Publishers in priority order.
            options: Run tunables; defaults apply when None.

        Returns:
            Structured report. Unexpected errors are logged and reported with
            ``ok=False`` instead of raised.
        """
        options = options or IngestOptions()
        if self._run_logger:
            self._run_logger.start_run(
                options.mode, {"sources": sources, "options": options.model_dump()}
            )

        try:
            result = await self._run(sources, options)
        except Exception as e:
            logger.exception("Ingestion run failed")
            result = IngestResult(ok=False, message=f"Ingestion failed: {e}", error=str(e))

        take_usage = getattr(self._fetcher, "take_usage", None)
        if callable(take_usage):
            result.usage += take_usage()

        logger.info(result.message)
        if self._run_logger:
            self._run_logger.finish_run(result)
        return result

    async def _run(self, sources: list[SourceDescriptor], options: IngestOptions) -> IngestResult:
        state = _RunState(
            options=options,
            derived=self._derived.with_settings(
                summary_words=options.summary_words,
                summarizer_timeout=options.summarizer_timeout,
                classifier_timeout=options.classifier_timeout,
                headline_timeout=options.headline_timeout,
            ),
        )

        if options.mode == "batch" and options.max_concurrent_sources > 1:
            semaphore = asyncio.Semaphore(options.max_concurrent_sources)

            async def bounded(source: SourceDescriptor) -> SourceDiagnostic:
                async with semaphore:
                    return await self._ingest_source(source, state)

            diagnostics = list(await asyncio.gather(*(bounded(s) for s in sources)))
        else:
            diagnostics = []
            for source in sources:
                if state.done:
                    break
                diagnostics.append(await self._ingest_source(source, state))

        failed = bool(diagnostics) and all(d.store_failed for d in diagnostics)
        count = len(state.inserted)
        if failed:
            message = "Store unavailable: no article could be inserted"
        elif count:
            message = f"Inserted {count} article(s) ({options.mode} mode)"
        else:
            message = "No new valid article found"
        return IngestResult(
            ok=not failed,
            inserted_count=count,
            inserted=list(state.inserted),
            diagnostics=diagnostics,
            message=message,
            usage=state.usage,
        )

    async def _ingest_source(self, source: SourceDescriptor, state: _RunState) -> SourceDiagnostic:
        diag = SourceDiagnostic(
            source=source.name, homepage_url=source.homepage_url, feed_url=source.feed_url
        )
        t0 = time.monotonic()
        source_usage = Usage()
        try:
            entries, candidates = await self._discover(source, state.options, diag)
            diag.candidates_found = len(candidates)
            if not candidates:
                fetch_failed = not diag.feed_found and not diag.homepage_fetched
                diag.skip_reason = "fetch-failed" if fetch_failed else "no-candidates"
            for candidate in candidates:
                if state.done:
                    break
                await self._process_candidate(
                    source, candidate, entries, state, diag, source_usage
                )
        except Exception as e:
            logger.exception(f"Unexpected error ingesting {source.name}")
            diag.error = str(e)

        state.usage += source_usage
        if candidates_tried := diag.candidates:
            if not diag.inserted_urls and diag.skip_reason is None:
                diag.skip_reason = candidates_tried[-1].outcome.value
        elif diag.error and diag.skip_reason is None:
            diag.skip_reason = "error"

        logger.info(
            f"{source.name}: {diag.candidates_found} candidates, "
            f"{len(diag.inserted_urls)} inserted"
            + (f", skipped ({diag.skip_reason})" if diag.skip_reason else "")
        )
        if self._run_logger:
            self._run_logger.log_stage(
                stage="source",
                component=source.name,
                input_data=source,
                output_data=diag,
                usage=source_usage,
                duration_seconds=time.monotonic() - t0,
            )
        return diag

    async def _discover(
        self, source: SourceDescriptor, options: IngestOptions, diag: SourceDiagnostic
    ) -> tuple[list[FeedEntry], list[Candidate]]:
        """Feed entries of the source and its merged, capped candidate list."""
        entries = await self._feed_entries(source, options, diag)
        cap = options.max_candidates_per_source

        candidates: list[Candidate] = []
        keys: set[str] = set()
        for entry in entries:
            key = normalize_url(entry.link)
            if key not in keys:
                keys.add(key)
                candidates.append(Candidate(url=entry.link, entry=entry))

        if len(candidates) < cap:
            html = await self._fetcher.fetch(source.homepage_url, timeout=options.page_timeout)
            if html is not None:
                diag.homepage_fetched = True
                for url in discover_links(html, source.homepage_url, max_links=cap):
                    key = normalize_url(url)
                    if key not in keys:
                        keys.add(key)
                        candidates.append(Candidate(url=url))

        return (entries, candidates[:cap])

    async def _feed_entries(
        self, source: SourceDescriptor, options: IngestOptions, diag: SourceDiagnostic
    ) -> list[FeedEntry]:
        if source.feed_url:
            feed_urls = [source.feed_url]
        elif options.probe_feeds:
            feed_urls = feed_probe_urls(source.homepage_url)
        else:
            feed_urls = []

        for url in feed_urls:
            body = await self._fetcher.fetch(url, timeout=options.probe_timeout)
            if body is None or not looks_like_feed(body):
                continue
            entries = parse_feed(body, url)
            if entries:
                diag.feed_found = True
                diag.feed_url = url
                return entries
        return []

    async def _process_candidate(
        self,
        source: SourceDescriptor,
        candidate: Candidate,
        entries: list[FeedEntry],
        state: _RunState,
        diag: SourceDiagnostic,
        usage: Usage,
    ) -> None:
        options = state.options
        canonical = normalize_url(candidate.url)
        if canonical in state.seen:
            diag.record(canonical, CandidateOutcome.ALREADY_SEEN)
            return
        state.seen.add(canonical)

        try:
            if await self._dedup.is_duplicate_url(canonical):
                diag.record(canonical, CandidateOutcome.DUPLICATE_URL)
                return

            article = await self._extractor.extract(
                strip_query(candidate.url), source.homepage_url, timeout=options.page_timeout
            )
            if article is None:
                diag.record(canonical, CandidateOutcome.UNEXTRACTABLE)
                return
            article = self._enrich(article, candidate, entries, options)

            if await self._is_duplicate_title(article.title, options):
                diag.record(canonical, CandidateOutcome.DUPLICATE_TITLE, article.title)
                return

            fields, derive_usage = await state.derived.derive(article)
            usage += derive_usage
            record = ArticleRecord(
                title=article.title,
                summary=fields.summary,
                source_url=canonical,
                source_name=source.name,
                topic=fields.topic,
                categories=fields.categories,
                headline=fields.headline,
                image_url=article.image_url,
                published_at=article.published_at,
            )
            outcome, detail = await self._insert(record, state)
        except Exception as e:
            logger.exception(f"Failed to process {canonical}")
            diag.record(canonical, CandidateOutcome.ERROR, str(e))
            return

        diag.record(canonical, outcome, detail)
        if outcome == CandidateOutcome.INSERTED:
            diag.inserted_urls.append(canonical)
            logger.info(f"Inserted {canonical} ({record.topic})")

    async def _is_duplicate_title(self, title: str, options: IngestOptions) -> bool:
        return await self._dedup.is_duplicate_title(
            title,
            threshold=options.title_dedupe_threshold,
            recent_limit=options.recent_titles_limit,
        )

    async def _insert(
        self, record: ArticleRecord, state: _RunState
    ) -> tuple[CandidateOutcome, str | None]:
        """Insert under the run's writer lock, re-checking dedup when sources overlap."""
        concurrent = state.options.mode == "batch" and state.options.max_concurrent_sources > 1
        async with state.write_lock:
            if concurrent:
                if await self._dedup.is_duplicate_url(record.source_url):
                    return (CandidateOutcome.DUPLICATE_URL, None)
                if await self._is_duplicate_title(record.title, state.options):
                    return (CandidateOutcome.DUPLICATE_TITLE, record.title)
            try:
                outcome = await self._store.insert(record)
            except Exception as e:
                logger.exception(f"Store insert raised for {record.source_url}")
                return (CandidateOutcome.INSERT_ERROR, str(e))
            if outcome == InsertOutcome.INSERTED:
                state.inserted.append(record)
                return (CandidateOutcome.INSERTED, None)
        if outcome == InsertOutcome.CONFLICT:
            return (CandidateOutcome.INSERT_CONFLICT, None)
        logger.warning(f"Store rejected {record.source_url}")
        return (CandidateOutcome.INSERT_ERROR, None)

    @staticmethod
    def _enrich(
        article: ExtractedArticle,
        candidate: Candidate,
        entries: list[FeedEntry],
        options: IngestOptions,
    ) -> ExtractedArticle:
        """Fill image, date and title from the feed where the page lacks them.

        Feed images are preferred over page images when ``match_feed_images``
        is set.
        """
        entry = candidate.entry
        updates: dict[str, str] = {}
        if options.match_feed_images:
            image = (entry.image_url if entry else None) or feed_image_for(candidate.url, entries)
            if image:
                updates["image_url"] = image
        if not article.published_at and entry and entry.published_at:
            updates["published_at"] = entry.published_at
        if article.title == UNTITLED and entry and entry.title:
            updates["title"] = entry.title
        return dataclasses.replace(article, **updates) if updates else article
