"""Configuration module for District ingestion."""

from district_ingest.config.factory import create_from_config, create_sources
from district_ingest.config.loader import get_default_config_path, load_config
from district_ingest.config.models import (
    ClassifierConfig,
    ClaudeClassifierConfig,
    ClaudeHeadlineConfig,
    ClaudeSummarizerConfig,
    DistrictConfig,
    FetcherConfig,
    HeadlineConfig,
    KeywordClassifierConfig,
    LeadWordsHeadlineConfig,
    LoggingConfig,
    MemoryStoreConfig,
    SourceConfig,
    SqlStoreConfig,
    StoreConfig,
    SummarizerConfig,
    TruncateSummarizerConfig,
)

__all__ = [
    "ClassifierConfig",
    "ClaudeClassifierConfig",
    "ClaudeHeadlineConfig",
    "ClaudeSummarizerConfig",
    "DistrictConfig",
    "FetcherConfig",
    "HeadlineConfig",
    "KeywordClassifierConfig",
    "LeadWordsHeadlineConfig",
    "LoggingConfig",
    "MemoryStoreConfig",
    "SourceConfig",
    "SqlStoreConfig",
    "StoreConfig",
    "SummarizerConfig",
    "TruncateSummarizerConfig",
    "create_from_config",
    "create_sources",
    "get_default_config_path",
    "load_config",
]
