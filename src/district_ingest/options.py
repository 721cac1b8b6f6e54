"""Per-run ingestion options."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IngestOptions(BaseModel):
    """Tunables for one ingestion run.

    Accepts snake_case or camelCase keys (``pageTimeoutMs``,
    ``titleDedupeThreshold``, ...). Every field has a default, so
    ``IngestOptions()`` is the documented behaviour. Timeouts are in
    milliseconds.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    probe_timeout_ms: int = Field(default=7000, gt=0)
    page_timeout_ms: int = Field(default=9000, gt=0)
    summarizer_timeout_ms: int = Field(default=10000, gt=0)
    classifier_timeout_ms: int = Field(default=8000, gt=0)
    headline_timeout_ms: int = Field(default=8000, gt=0)
    title_dedupe_threshold: float = Field(default=0.55, ge=0.0, le=1.0)
    recent_titles_limit: int = Field(default=500, ge=0)
    max_candidates_per_source: int = Field(default=12, ge=1)
    summary_words: int = Field(default=60, ge=1)
    mode: Literal["single", "batch"] = "single"
    max_concurrent_sources: int = Field(default=1, ge=1)
    probe_feeds: bool = True
    match_feed_images: bool = True

    @property
    def probe_timeout(self) -> float:
        return self.probe_timeout_ms / 1000

    @property
    def page_timeout(self) -> float:
        return self.page_timeout_ms / 1000

    @property
    def summarizer_timeout(self) -> float:
        return self.summarizer_timeout_ms / 1000

    @property
    def classifier_timeout(self) -> float:
        return self.classifier_timeout_ms / 1000

    @property
    def headline_timeout(self) -> float:
        return self.headline_timeout_ms / 1000
