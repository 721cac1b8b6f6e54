"""Tests for summary rules and the derived-field pipeline."""

import asyncio

import pytest

from district_ingest.data import (
    DEFAULT_HEADLINE,
    APICallUsage,
    ExtractedArticle,
    Headline,
    Topic,
    Usage,
)
from district_ingest.derive import (
    DerivedFieldPipeline,
    clean_headline_part,
    finish_summary,
    looks_copied,
    truncate_summary,
)

BODY = (
    "The Ministry of Agriculture unveiled a support scheme for small planters on Monday. "
    "The scheme covers irrigation kits, seed subsidies and cheaper loans from the state bank. "
    "Planters' unions welcomed the measures but asked for faster payments this season."
)
GOOD_SUMMARY = (
    "Small planters will receive irrigation kits, seed subsidies and cheaper state loans "
    "under a new agriculture scheme, which unions welcomed while urging quicker payments."
)


def _usage(tokens: int = 10) -> Usage:
    return Usage(api_calls=[APICallUsage(model="m", input_tokens=tokens, output_tokens=1)])


class FakeSummarizer:
    def __init__(self, *answers: str, delay: float = 0.0, error: Exception | None = None) -> None:
        self.answers = list(answers)
        self.calls = 0
        self.delay = delay
        self.error = error

    async def summarize(self, text: str, *, max_words: int) -> tuple[str, Usage]:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return (self.answers[min(self.calls, len(self.answers)) - 1], _usage())


class FakeClassifier:
    def __init__(self, answer: str = "Business", error: Exception | None = None) -> None:
        self.answer = answer
        self.error = error

    async def classify(self, text: str) -> tuple[str, Usage]:
        if self.error:
            raise self.error
        return (self.answer, _usage())


class FakeHeadlineGenerator:
    def __init__(self, headline: Headline | None = None, error: Exception | None = None) -> None:
        self.headline = headline or Headline("Planters get aid", "Unions want speed")
        self.error = error

    async def generate(self, title: str, summary: str) -> tuple[Headline, Usage]:
        if self.error:
            raise self.error
        return (self.headline, _usage())


class TestFinishSummary:
    """Tests for finish_summary and truncate_summary."""

    def test_appends_period(self) -> None:
        assert finish_summary("Rates stay unchanged") == "Rates stay unchanged."

    def test_keeps_existing_terminator(self) -> None:
        assert finish_summary("Rates stay unchanged!") == "Rates stay unchanged!"

    def test_removes_ellipses(self) -> None:
        assert finish_summary("Rates stay... unchanged…") == "Rates stay unchanged."

    def test_trims_to_max_words(self) -> None:
        text = " ".join(f"w{i}" for i in range(100))
        result = finish_summary(text, 60)
        assert len(result.split()) == 60
        assert result.endswith(".")

    def test_cuts_back_to_last_sentence_end(self) -> None:
        text = "One two three four five. Six seven"
        assert finish_summary(text, 7) == "One two three four five."

    def test_does_not_cut_away_most_of_the_text(self) -> None:
        text = "One. Two three four five six seven"
        assert finish_summary(text, 7) == "One. Two three four five six seven."

    def test_strips_dangling_punctuation(self) -> None:
        assert finish_summary("Rates stay unchanged,") == "Rates stay unchanged."
        assert finish_summary("Rates stay unchanged -") == "Rates stay unchanged."

    def test_empty(self) -> None:
        assert finish_summary("") == ""
        assert finish_summary("...") == ""

    def test_truncate_summary_uses_leading_words(self) -> None:
        result = truncate_summary(BODY, 10)
        assert result.startswith("The Ministry of Agriculture")
        assert len(result.split()) <= 10
        assert result.endswith(".")


def test_looks_copied() -> None:
    assert looks_copied(BODY[:200], BODY)
    assert not looks_copied(GOOD_SUMMARY, BODY)
    assert not looks_copied("", BODY)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Budget: passed!", "Budget passed"),
        ("Big news for the island", "Big news for"),
        ("<b>Rates</b> hold", "Rates hold"),
        ("!!!", "News Update"),
        ("snake_case headline", "snake case headline"),
    ],
)
def test_clean_headline_part(text: str, expected: str) -> None:
    assert clean_headline_part(text, "News Update") == expected


class TestDerivedFieldPipeline:
    """Tests for DerivedFieldPipeline."""

    article = ExtractedArticle(title="Planters aid", description="", body_text=BODY)

    async def test_derives_all_fields(self) -> None:
        pipeline = DerivedFieldPipeline(
            FakeSummarizer(GOOD_SUMMARY), FakeClassifier("Business"), FakeHeadlineGenerator()
        )
        fields, usage = await pipeline.derive(self.article)

        assert fields.summary == GOOD_SUMMARY
        assert fields.topic is Topic.BUSINESS
        assert fields.categories[0] == "Top Stories"
        assert "Finance" in fields.categories
        assert fields.headline == Headline("Planters get aid", "Unions want speed")
        assert len(usage.api_calls) == 3

    async def test_without_capabilities_uses_fallbacks(self) -> None:
        fields, usage = await DerivedFieldPipeline().derive(self.article)

        assert fields.summary == truncate_summary(BODY)
        assert fields.topic is Topic.MISCELLANEOUS
        assert fields.headline == DEFAULT_HEADLINE
        assert usage.api_calls == []

    async def test_summarizer_error_falls_back_to_truncation(self) -> None:
        pipeline = DerivedFieldPipeline(FakeSummarizer(error=RuntimeError("boom")))
        summary, _ = await pipeline.summarize(BODY)
        assert summary == truncate_summary(BODY)

    async def test_summarizer_timeout_falls_back_to_truncation(self) -> None:
        summarizer = FakeSummarizer(GOOD_SUMMARY, delay=1.0)
        pipeline = DerivedFieldPipeline(summarizer, summarizer_timeout=0.01)
        summary, _ = await pipeline.summarize(BODY)
        assert summary == truncate_summary(BODY)
        assert summarizer.calls == 1

    async def test_copied_summary_is_retried_once(self) -> None:
        summarizer = FakeSummarizer(BODY, GOOD_SUMMARY)
        pipeline = DerivedFieldPipeline(summarizer)
        summary, usage = await pipeline.summarize(BODY)
        assert summary == GOOD_SUMMARY
        assert summarizer.calls == 2
        assert len(usage.api_calls) == 2

    async def test_short_summaries_fall_back_after_retry(self) -> None:
        summarizer = FakeSummarizer("Too short.", "Still short.")
        pipeline = DerivedFieldPipeline(summarizer)
        summary, _ = await pipeline.summarize(BODY)
        assert summary == truncate_summary(BODY)
        assert summarizer.calls == 2

    async def test_classifier_answer_is_mapped(self) -> None:
        pipeline = DerivedFieldPipeline(classifier=FakeClassifier("economy and markets"))
        topic, _ = await pipeline.classify(BODY)
        assert topic is Topic.BUSINESS

    async def test_classifier_error_gives_miscellaneous(self) -> None:
        pipeline = DerivedFieldPipeline(classifier=FakeClassifier(error=RuntimeError("down")))
        topic, _ = await pipeline.classify(BODY)
        assert topic is Topic.MISCELLANEOUS

    async def test_short_text_is_not_classified(self) -> None:
        classifier = FakeClassifier("Sports")
        topic, usage = await DerivedFieldPipeline(classifier=classifier).classify("Tiny.")
        assert topic is Topic.MISCELLANEOUS
        assert usage.api_calls == []

    async def test_headline_is_cleaned(self) -> None:
        generator = FakeHeadlineGenerator(Headline("Aid: for planters, now!", ""))
        headline, _ = await DerivedFieldPipeline(headline_generator=generator).headline("t", "s")
        assert headline == Headline("Aid for planters", DEFAULT_HEADLINE.subheadline)

    async def test_headline_error_gives_default(self) -> None:
        generator = FakeHeadlineGenerator(error=RuntimeError("down"))
        headline, _ = await DerivedFieldPipeline(headline_generator=generator).headline("t", "s")
        assert headline == DEFAULT_HEADLINE

    async def test_with_settings_changes_summary_length(self) -> None:
        pipeline = DerivedFieldPipeline().with_settings(
            summary_words=5,
            summarizer_timeout=1.0,
            classifier_timeout=1.0,
            headline_timeout=1.0,
        )
        summary, _ = await pipeline.summarize(BODY)
        assert len(summary.split()) <= 5
