"""District Ingest: news ingestion for the District reader app."""

from district_ingest.classify.base import Classifier
from district_ingest.classify.claude import ClaudeClassifier
from district_ingest.classify.keyword import KeywordClassifier
from district_ingest.config import DistrictConfig, create_from_config, load_config
from district_ingest.data import (
    DEFAULT_HEADLINE,
    UNTITLED,
    APICallUsage,
    ArticleRecord,
    Candidate,
    CandidateDiagnostic,
    CandidateOutcome,
    DerivedFields,
    ExtractedArticle,
    FeedEntry,
    Headline,
    IngestResult,
    InsertOutcome,
    SourceDescriptor,
    SourceDiagnostic,
    Topic,
    Usage,
)
from district_ingest.dedup import (
    DedupEngine,
    title_matches_any,
    token_overlap_ratio,
    tokenize_title,
)
from district_ingest.derive import (
    DerivedFieldPipeline,
    category_tags,
    looks_copied,
    map_to_category,
    truncate_summary,
)
from district_ingest.discovery import (
    discover_links,
    is_listing_url,
    match_article_pattern,
    match_excluded_pattern,
)
from district_ingest.extract import ArticleExtractor, extract_article_from_html
from district_ingest.feeds import feed_image_for, feed_probe_urls, parse_feed
from district_ingest.fetch import Fetcher, HttpFetcher
from district_ingest.headline.base import HeadlineGenerator
from district_ingest.headline.claude import ClaudeHeadlineGenerator
from district_ingest.headline.lead_words import LeadWordsHeadlineGenerator
from district_ingest.options import IngestOptions
from district_ingest.pipeline import IngestionOrchestrator, Pipeline
from district_ingest.run_logger import RunLogger
from district_ingest.store import ArticleStore, MemoryArticleStore, SqlArticleStore
from district_ingest.summarize.base import Summarizer
from district_ingest.summarize.claude import ClaudeSummarizer
from district_ingest.url import absolute_url, normalize_url, same_host, strip_query

__all__ = [
    # Models
    "APICallUsage",
    "ArticleRecord",
    "Candidate",
    "CandidateDiagnostic",
    "CandidateOutcome",
    "DEFAULT_HEADLINE",
    "DerivedFields",
    "ExtractedArticle",
    "FeedEntry",
    "Headline",
    "IngestOptions",
    "IngestResult",
    "InsertOutcome",
    "SourceDescriptor",
    "SourceDiagnostic",
    "Topic",
    "UNTITLED",
    "Usage",
    # Functions
    "absolute_url",
    "category_tags",
    "discover_links",
    "extract_article_from_html",
    "feed_image_for",
    "feed_probe_urls",
    "is_listing_url",
    "looks_copied",
    "map_to_category",
    "match_article_pattern",
    "match_excluded_pattern",
    "normalize_url",
    "parse_feed",
    "same_host",
    "strip_query",
    "title_matches_any",
    "token_overlap_ratio",
    "tokenize_title",
    "truncate_summary",
    # Protocols
    "ArticleStore",
    "Classifier",
    "Fetcher",
    "HeadlineGenerator",
    "Pipeline",
    "Summarizer",
    # Fetching and extraction
    "ArticleExtractor",
    "HttpFetcher",
    # Dedup
    "DedupEngine",
    # Derived fields
    "ClaudeClassifier",
    "ClaudeHeadlineGenerator",
    "ClaudeSummarizer",
    "DerivedFieldPipeline",
    "KeywordClassifier",
    "LeadWordsHeadlineGenerator",
    # Stores
    "MemoryArticleStore",
    "SqlArticleStore",
    # Pipelines
    "IngestionOrchestrator",
    # Logging
    "RunLogger",
    # Config
    "DistrictConfig",
    "create_from_config",
    "load_config",
]
