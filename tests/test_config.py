"""Tests for configuration loading and factory functions."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from district_ingest.classify import ClaudeClassifier, KeywordClassifier
from district_ingest.config import (
    ClaudeClassifierConfig,
    ClaudeHeadlineConfig,
    ClaudeSummarizerConfig,
    DistrictConfig,
    KeywordClassifierConfig,
    LeadWordsHeadlineConfig,
    MemoryStoreConfig,
    SqlStoreConfig,
    TruncateSummarizerConfig,
    create_from_config,
    create_sources,
    get_default_config_path,
    load_config,
)
from district_ingest.config.factory import (
    create_classifier,
    create_headline_generator,
    create_store,
    create_summarizer,
)
from district_ingest.headline import ClaudeHeadlineGenerator, LeadWordsHeadlineGenerator
from district_ingest.options import IngestOptions
from district_ingest.pipeline import IngestionOrchestrator
from district_ingest.run_logger import RunLogger
from district_ingest.store import MemoryArticleStore, SqlArticleStore
from district_ingest.summarize import ClaudeSummarizer

OFFLINE_CONFIG = {
    "sources": [{"name": "Example", "homepage_url": "https://news.example"}],
    "summarizer": {"type": "truncate"},
    "classifier": {"type": "keyword"},
    "headline": {"type": "lead_words"},
    "store": {"type": "memory"},
}


class TestConfigModels:
    """Tests for Pydantic config models."""

    def test_defaults(self) -> None:
        config = DistrictConfig()
        assert config.sources == []
        assert isinstance(config.summarizer, ClaudeSummarizerConfig)
        assert isinstance(config.classifier, ClaudeClassifierConfig)
        assert isinstance(config.headline, ClaudeHeadlineConfig)
        assert isinstance(config.store, SqlStoreConfig)
        assert config.store.url == "sqlite:///district.db"
        assert config.logging.enabled is False

    def test_claude_model_default(self) -> None:
        assert ClaudeSummarizerConfig().model == "claude-haiku-4-5-20251001"
        assert ClaudeSummarizerConfig().temperature == 0.35

    def test_discriminated_unions(self) -> None:
        config = DistrictConfig.model_validate(OFFLINE_CONFIG)
        assert isinstance(config.summarizer, TruncateSummarizerConfig)
        assert isinstance(config.classifier, KeywordClassifierConfig)
        assert isinstance(config.headline, LeadWordsHeadlineConfig)
        assert config.headline.words == 3
        assert isinstance(config.store, MemoryStoreConfig)

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DistrictConfig.model_validate({"store": {"type": "mongo"}})

    def test_source_requires_homepage(self) -> None:
        with pytest.raises(ValidationError):
            DistrictConfig.model_validate({"sources": [{"name": "Example"}]})


class TestIngestOptions:
    """Tests for IngestOptions."""

    def test_defaults(self) -> None:
        options = IngestOptions()
        assert options.mode == "single"
        assert options.title_dedupe_threshold == 0.55
        assert options.recent_titles_limit == 500
        assert options.max_candidates_per_source == 12
        assert options.summary_words == 60
        assert options.page_timeout == 9.0
        assert options.probe_timeout == 7.0

    def test_camel_case_and_snake_case_keys(self) -> None:
        camel = IngestOptions.model_validate({"pageTimeoutMs": 1500, "titleDedupeThreshold": 0.7})
        snake = IngestOptions.model_validate({"page_timeout_ms": 1500})
        assert camel.page_timeout == 1.5
        assert camel.title_dedupe_threshold == 0.7
        assert snake.page_timeout_ms == 1500

    def test_invalid_values_rejected(self) -> None:
        with pytest.raises(ValidationError):
            IngestOptions(mode="everything")  # type: ignore[arg-type]
        with pytest.raises(ValidationError):
            IngestOptions(title_dedupe_threshold=1.5)
        with pytest.raises(ValidationError):
            IngestOptions(page_timeout_ms=0)

    def test_frozen(self) -> None:
        with pytest.raises(ValidationError):
            IngestOptions().mode = "batch"  # type: ignore[misc]


class TestConfigLoading:
    """Tests for YAML config loading."""

    def test_load_config(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            """
sources:
  - name: Example
    homepage_url: https://news.example
    feed_url: https://news.example/feed/
options:
  mode: batch
  maxConcurrentSources: 2
classifier:
  type: keyword
store:
  type: memory
"""
        )
        config = load_config(path)

        assert config.sources[0].feed_url == "https://news.example/feed/"
        assert config.options.mode == "batch"
        assert config.options.max_concurrent_sources == 2
        assert isinstance(config.classifier, KeywordClassifierConfig)

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == DistrictConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_get_default_config_path(self) -> None:
        path = get_default_config_path()
        assert path.name == "default.yaml"
        assert path.exists()

    def test_load_default_config(self) -> None:
        config = load_config(get_default_config_path())
        names = [s.name for s in config.sources]
        assert len(names) == 6
        assert names[0] == "Defi Media Group"
        assert "Ion News" in names
        assert config.options.mode == "single"
        assert config.options.page_timeout_ms == 9000


class TestFactory:
    """Tests for factory functions."""

    @pytest.fixture(autouse=True)
    def api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CLAUDE_API_KEY", "test-key")

    def test_create_sources_keeps_order(self) -> None:
        config = DistrictConfig.model_validate(
            {
                "sources": [
                    {"name": "B", "homepage_url": "https://b.example"},
                    {
                        "name": "A",
                        "homepage_url": "https://a.example",
                        "feed_url": "https://a.example/rss",
                    },
                ]
            }
        )
        sources = create_sources(config.sources)
        assert [s.name for s in sources] == ["B", "A"]
        assert sources[1].feed_url == "https://a.example/rss"

    def test_create_summarizer(self) -> None:
        assert isinstance(create_summarizer(ClaudeSummarizerConfig()), ClaudeSummarizer)
        assert create_summarizer(TruncateSummarizerConfig()) is None

    def test_create_classifier(self) -> None:
        assert isinstance(create_classifier(ClaudeClassifierConfig()), ClaudeClassifier)
        assert isinstance(create_classifier(KeywordClassifierConfig()), KeywordClassifier)

    def test_create_headline_generator(self) -> None:
        claude = create_headline_generator(ClaudeHeadlineConfig())
        assert isinstance(claude, ClaudeHeadlineGenerator)
        assert isinstance(
            create_headline_generator(LeadWordsHeadlineConfig(words=2)), LeadWordsHeadlineGenerator
        )

    def test_create_store(self, tmp_path: Path) -> None:
        assert isinstance(create_store(MemoryStoreConfig()), MemoryArticleStore)
        store = create_store(SqlStoreConfig(url=f"sqlite:///{tmp_path / 'x.db'}"))
        assert isinstance(store, SqlArticleStore)

    def test_create_from_config_without_logging(self) -> None:
        config = DistrictConfig.model_validate(OFFLINE_CONFIG)
        orchestrator, run_logger = create_from_config(config)
        assert isinstance(orchestrator, IngestionOrchestrator)
        assert run_logger is None

    def test_create_from_config_log_override(self, tmp_path: Path) -> None:
        config = DistrictConfig.model_validate(OFFLINE_CONFIG)
        _, run_logger = create_from_config(
            config, log_override=True, log_dir_override=str(tmp_path)
        )
        assert isinstance(run_logger, RunLogger)
        assert run_logger.enabled

    def test_create_from_default_config(self) -> None:
        orchestrator, _ = create_from_config(load_config(get_default_config_path()))
        assert isinstance(orchestrator, IngestionOrchestrator)
