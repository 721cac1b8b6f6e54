"""Article summarization."""

from district_ingest.summarize.base import Summarizer
from district_ingest.summarize.claude import ClaudeSummarizer

__all__ = [
    "ClaudeSummarizer",
    "Summarizer",
]
