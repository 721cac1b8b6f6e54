"""Topic classification."""

from district_ingest.classify.base import Classifier
from district_ingest.classify.claude import ClaudeClassifier
from district_ingest.classify.keyword import KeywordClassifier

__all__ = [
    "ClaudeClassifier",
    "Classifier",
    "KeywordClassifier",
]
