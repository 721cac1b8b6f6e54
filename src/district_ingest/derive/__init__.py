"""Derived fields computed before insertion."""

from district_ingest.derive.pipeline import DerivedFieldPipeline, clean_headline_part
from district_ingest.derive.summary import (
    MIN_SUMMARY_WORDS,
    SUMMARY_WORDS,
    finish_summary,
    looks_copied,
    truncate_summary,
)
from district_ingest.topics import (
    FINANCE_KEYWORDS,
    GOOD_NEWS_KEYWORDS,
    TOPIC_SYNONYMS,
    category_tags,
    map_to_category,
)

__all__ = [
    "DerivedFieldPipeline",
    "FINANCE_KEYWORDS",
    "GOOD_NEWS_KEYWORDS",
    "MIN_SUMMARY_WORDS",
    "SUMMARY_WORDS",
    "TOPIC_SYNONYMS",
    "category_tags",
    "clean_headline_part",
    "finish_summary",
    "looks_copied",
    "map_to_category",
    "truncate_summary",
]
