"""Pydantic configuration models for District ingestion components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from district_ingest.fetch.http import DEFAULT_MAX_BYTES, DEFAULT_USER_AGENT
from district_ingest.llm import DEFAULT_MODEL
from district_ingest.options import IngestOptions

# ============================================================
# Source Config
# ============================================================


class SourceConfig(BaseModel):
    """One publisher to ingest from."""

    name: str
    homepage_url: str
    feed_url: str | None = None

    model_config = {"frozen": True}


# ============================================================
# Fetcher Config
# ============================================================


class FetcherConfig(BaseModel):
    """Configuration for HttpFetcher."""

    user_agent: str = DEFAULT_USER_AGENT
    max_bytes: int = Field(default=DEFAULT_MAX_BYTES, gt=0)

    model_config = {"frozen": True}


# ============================================================
# Summarizer Configs
# ============================================================


class ClaudeSummarizerConfig(BaseModel):
    """Configuration for ClaudeSummarizer."""

    type: Literal["claude"] = "claude"
    model: str = DEFAULT_MODEL
    temperature: float = 0.35

    model_config = {"frozen": True}


class TruncateSummarizerConfig(BaseModel):
    """No model: summaries are the leading words of the article."""

    type: Literal["truncate"] = "truncate"

    model_config = {"frozen": True}


SummarizerConfig = Annotated[
    ClaudeSummarizerConfig | TruncateSummarizerConfig,
    Field(discriminator="type"),
]


# ============================================================
# Classifier Configs
# ============================================================


class ClaudeClassifierConfig(BaseModel):
    """Configuration for ClaudeClassifier."""

    type: Literal["claude"] = "claude"
    model: str = DEFAULT_MODEL

    model_config = {"frozen": True}


class KeywordClassifierConfig(BaseModel):
    """Configuration for KeywordClassifier."""

    type: Literal["keyword"] = "keyword"

    model_config = {"frozen": True}


ClassifierConfig = Annotated[
    ClaudeClassifierConfig | KeywordClassifierConfig,
    Field(discriminator="type"),
]


# ============================================================
# Headline Configs
# ============================================================


class ClaudeHeadlineConfig(BaseModel):
    """Configuration for ClaudeHeadlineGenerator."""

    type: Literal["claude"] = "claude"
    model: str = DEFAULT_MODEL

    model_config = {"frozen": True}


class LeadWordsHeadlineConfig(BaseModel):
    """Configuration for LeadWordsHeadlineGenerator."""

    type: Literal["lead_words"] = "lead_words"
    words: int = Field(default=3, ge=1)

    model_config = {"frozen": True}


HeadlineConfig = Annotated[
    ClaudeHeadlineConfig | LeadWordsHeadlineConfig,
    Field(discriminator="type"),
]


# ============================================================
# Store Configs
# ============================================================


class MemoryStoreConfig(BaseModel):
    """In-process store; nothing survives the process."""

    type: Literal["memory"] = "memory"

    model_config = {"frozen": True}


class SqlStoreConfig(BaseModel):
    """Configuration for SqlArticleStore."""

    type: Literal["sql"] = "sql"
    url: str = "sqlite:///district.db"

    model_config = {"frozen": True}


StoreConfig = Annotated[
    MemoryStoreConfig | SqlStoreConfig,
    Field(discriminator="type"),
]


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for per-run JSON logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class DistrictConfig(BaseModel):
    """Root configuration for District ingestion."""

    sources: list[SourceConfig] = Field(default_factory=list)
    options: IngestOptions = Field(default_factory=IngestOptions)
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    summarizer: SummarizerConfig = Field(default_factory=ClaudeSummarizerConfig)
    classifier: ClassifierConfig = Field(default_factory=ClaudeClassifierConfig)
    headline: HeadlineConfig = Field(default_factory=ClaudeHeadlineConfig)
    store: StoreConfig = Field(default_factory=SqlStoreConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
