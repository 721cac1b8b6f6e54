"""Headline generation."""

from district_ingest.headline.base import HeadlineGenerator
from district_ingest.headline.claude import ClaudeHeadlineGenerator
from district_ingest.headline.lead_words import LeadWordsHeadlineGenerator

__all__ = [
    "ClaudeHeadlineGenerator",
    "HeadlineGenerator",
    "LeadWordsHeadlineGenerator",
]
