"""Derived-field pipeline: summary, topic, headline pair and category tags."""

import asyncio
import logging
import re

from district_ingest.classify.base import Classifier
from district_ingest.data import (
    DEFAULT_HEADLINE,
    DerivedFields,
    ExtractedArticle,
    Headline,
    Topic,
    Usage,
)
from district_ingest.derive.summary import (
    MIN_SUMMARY_WORDS,
    SUMMARY_WORDS,
    finish_summary,
    looks_copied,
    truncate_summary,
)
from district_ingest.headline.base import HeadlineGenerator
from district_ingest.summarize.base import Summarizer
from district_ingest.text import strip_html, trim_to_words, word_count
from district_ingest.topics import category_tags, map_to_category

logger = logging.getLogger(__name__)

CLASSIFIER_INPUT_CHARS = 4000
MIN_CLASSIFIER_INPUT_CHARS = 20
HEADLINE_WORDS = 3
SUMMARY_ATTEMPTS = 2

_NON_WORD = re.compile(r"[^\w\s]|_")


def clean_headline_part(text: str, fallback: str) -> str:
    """Letters and digits only, at most three words; ``fallback`` when empty."""
    cleaned = trim_to_words(_NON_WORD.sub(" ", strip_html(text)), HEADLINE_WORDS)
    return cleaned or fallback


class DerivedFieldPipeline:
    """Compute the derived fields of an article before it is stored.

    Each capability is optional and guarded: a missing, failing or slow
    capability degrades to a deterministic fallback, so ``derive`` never
    raises.

    Args:
        summarizer: Model-backed summarizer, or None for plain truncation.
        classifier: Topic classifier, or None for Miscellaneous.
        headline_generator: Headline generator, or None for the default pair.
        summary_words: Summary length in words.
        summarizer_timeout: Seconds allowed per summarizer call.
        classifier_timeout: Seconds allowed for classification.
        headline_timeout: Seconds allowed for headline generation.
    """

    def __init__(
        self,
        summarizer: Summarizer | None = None,
        classifier: Classifier | None = None,
        headline_generator: HeadlineGenerator | None = None,
        *,
        summary_words: int = SUMMARY_WORDS,
        summarizer_timeout: float = 10.0,
        classifier_timeout: float = 8.0,
        headline_timeout: float = 8.0,
    ) -> None:
        self._summarizer = summarizer
        self._classifier = classifier
        self._headline_generator = headline_generator
        self._summary_words = summary_words
        self._summarizer_timeout = summarizer_timeout
        self._classifier_timeout = classifier_timeout
        self._headline_timeout = headline_timeout

    def with_settings(
        self,
        *,
        summary_words: int,
        summarizer_timeout: float,
        classifier_timeout: float,
        headline_timeout: float,
    ) -> "DerivedFieldPipeline":
        """Copy of this pipeline with different length and timeout settings."""
        return DerivedFieldPipeline(
            self._summarizer,
            self._classifier,
            self._headline_generator,
            summary_words=summary_words,
            summarizer_timeout=summarizer_timeout,
            classifier_timeout=classifier_timeout,
            headline_timeout=headline_timeout,
        )

    async def summarize(self, body: str) -> tuple[str, Usage]:
        """Model summary if it passes the length and copy checks, else truncation.

        A rejected summary is retried once. Timeouts and errors go straight to
        truncation.
        """
        fallback = truncate_summary(body, self._summary_words)
        usage = Usage()
        if self._summarizer is None:
            return (fallback, usage)

        for attempt in range(1, SUMMARY_ATTEMPTS + 1):
            try:
                raw, call_usage = await asyncio.wait_for(
                    self._summarizer.summarize(body, max_words=self._summary_words),
                    timeout=self._summarizer_timeout,
                )
            except Exception as e:
                logger.warning(f"Summarizer failed ({type(e).__name__}), using truncation")
                return (fallback, usage)
            usage += call_usage

            summary = finish_summary(raw, self._summary_words)
            if word_count(summary) >= MIN_SUMMARY_WORDS and not looks_copied(summary, body):
                return (summary, usage)
            logger.info(f"Summary attempt {attempt} rejected (too short or copied)")

        return (fallback, usage)

    async def classify(self, body: str) -> tuple[Topic, Usage]:
        """Topic from the classifier mapped onto the vocabulary; Miscellaneous on failure."""
        text = body.strip()[:CLASSIFIER_INPUT_CHARS]
        if self._classifier is None or len(text) < MIN_CLASSIFIER_INPUT_CHARS:
            return (Topic.MISCELLANEOUS, Usage())
        try:
            raw, usage = await asyncio.wait_for(
                self._classifier.classify(text), timeout=self._classifier_timeout
            )
        except Exception as e:
            logger.warning(f"Classifier failed ({type(e).__name__}), using Miscellaneous")
            return (Topic.MISCELLANEOUS, Usage())
        return (map_to_category(raw), usage)

    async def headline(self, title: str, summary: str) -> tuple[Headline, Usage]:
        """Cleaned headline pair; the default pair on failure."""
        if self._headline_generator is None:
            return (DEFAULT_HEADLINE, Usage())
        try:
            raw, usage = await asyncio.wait_for(
                self._headline_generator.generate(title, summary),
                timeout=self._headline_timeout,
            )
        except Exception as e:
            logger.warning(f"Headline generation failed ({type(e).__name__}), using default")
            return (DEFAULT_HEADLINE, Usage())
        return (
            Headline(
                headline=clean_headline_part(raw.headline, DEFAULT_HEADLINE.headline),
                subheadline=clean_headline_part(raw.subheadline, DEFAULT_HEADLINE.subheadline),
            ),
            usage,
        )

    async def derive(self, article: ExtractedArticle) -> tuple[DerivedFields, Usage]:
        """Compute summary, topic, headline and tags for an extracted article."""
        body = article.body_text
        (summary, summary_usage), (topic, topic_usage) = await asyncio.gather(
            self.summarize(body), self.classify(body)
        )
        headline, headline_usage = await self.headline(article.title, summary)
        fields = DerivedFields(
            summary=summary,
            topic=topic,
            categories=category_tags(body, topic),
            headline=headline,
        )
        return (fields, summary_usage + topic_usage + headline_usage)
