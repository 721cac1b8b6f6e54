"""Factory functions to create components from configuration."""

from pathlib import Path

from district_ingest.classify.base import Classifier
from district_ingest.classify.claude import ClaudeClassifier
from district_ingest.classify.keyword import KeywordClassifier
from district_ingest.config.models import (
    ClaudeClassifierConfig,
    ClaudeHeadlineConfig,
    ClaudeSummarizerConfig,
    ClassifierConfig,
    DistrictConfig,
    FetcherConfig,
    HeadlineConfig,
    KeywordClassifierConfig,
    LeadWordsHeadlineConfig,
    MemoryStoreConfig,
    SourceConfig,
    SqlStoreConfig,
    StoreConfig,
    SummarizerConfig,
    TruncateSummarizerConfig,
)
from district_ingest.data import SourceDescriptor
from district_ingest.derive import DerivedFieldPipeline
from district_ingest.fetch.http import HttpFetcher
from district_ingest.headline.base import HeadlineGenerator
from district_ingest.headline.claude import ClaudeHeadlineGenerator
from district_ingest.headline.lead_words import LeadWordsHeadlineGenerator
from district_ingest.options import IngestOptions
from district_ingest.pipeline.ingest import IngestionOrchestrator
from district_ingest.run_logger import RunLogger
from district_ingest.store.base import ArticleStore
from district_ingest.store.memory import MemoryArticleStore
from district_ingest.store.sql import SqlArticleStore
from district_ingest.summarize.base import Summarizer
from district_ingest.summarize.claude import ClaudeSummarizer


def create_sources(configs: list[SourceConfig]) -> list[SourceDescriptor]:
    """Build source descriptors, keeping configured priority order."""
    return [
        SourceDescriptor(name=c.name, homepage_url=c.homepage_url, feed_url=c.feed_url)
        for c in configs
    ]


def create_fetcher(config: FetcherConfig) -> HttpFetcher:
    """Create the HTTP fetcher from config."""
    return HttpFetcher(user_agent=config.user_agent, max_bytes=config.max_bytes)


def create_summarizer(config: SummarizerConfig) -> Summarizer | None:
    """Create a summarizer from config; None means plain truncation.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, ClaudeSummarizerConfig):
        return ClaudeSummarizer(model=config.model, temperature=config.temperature)
    if isinstance(config, TruncateSummarizerConfig):
        return None
    msg = f"Unknown summarizer config type: {type(config)}"
    raise ValueError(msg)


def create_classifier(config: ClassifierConfig) -> Classifier:
    """Create a topic classifier from config."""
    if isinstance(config, ClaudeClassifierConfig):
        return ClaudeClassifier(model=config.model)
    if isinstance(config, KeywordClassifierConfig):
        return KeywordClassifier()
    msg = f"Unknown classifier config type: {type(config)}"
    raise ValueError(msg)


def create_headline_generator(config: HeadlineConfig) -> HeadlineGenerator:
    """Create a headline generator from config."""
    if isinstance(config, ClaudeHeadlineConfig):
        return ClaudeHeadlineGenerator(model=config.model)
    if isinstance(config, LeadWordsHeadlineConfig):
        return LeadWordsHeadlineGenerator(words=config.words)
    msg = f"Unknown headline config type: {type(config)}"
    raise ValueError(msg)


def create_store(config: StoreConfig) -> ArticleStore:
    """Create the article store from config."""
    if isinstance(config, SqlStoreConfig):
        return SqlArticleStore(url=config.url)
    if isinstance(config, MemoryStoreConfig):
        return MemoryArticleStore()
    msg = f"Unknown store config type: {type(config)}"
    raise ValueError(msg)


def create_derived_pipeline(config: DistrictConfig) -> DerivedFieldPipeline:
    """Create the derived-field pipeline with the configured capabilities."""
    options: IngestOptions = config.options
    return DerivedFieldPipeline(
        create_summarizer(config.summarizer),
        create_classifier(config.classifier),
        create_headline_generator(config.headline),
        summary_words=options.summary_words,
        summarizer_timeout=options.summarizer_timeout,
        classifier_timeout=options.classifier_timeout,
        headline_timeout=options.headline_timeout,
    )


def create_from_config(
    config: DistrictConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[IngestionOrchestrator, RunLogger | None]:
    """Create a complete orchestrator from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (orchestrator, run_logger).
        run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    orchestrator = IngestionOrchestrator(
        create_fetcher(config.fetcher),
        create_store(config.store),
        create_derived_pipeline(config),
        run_logger=run_logger,
    )
    return (orchestrator, run_logger)
