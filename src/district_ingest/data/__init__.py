"""Data models for District news ingestion."""

from district_ingest.data.models import (
    DEFAULT_HEADLINE,
    UNTITLED,
    APICallUsage,
    ArticleRecord,
    Candidate,
    CandidateDiagnostic,
    CandidateOutcome,
    DerivedFields,
    ExtractedArticle,
    FeedEntry,
    Headline,
    IngestResult,
    InsertOutcome,
    SourceDescriptor,
    SourceDiagnostic,
    Topic,
    Usage,
)

__all__ = [
    "APICallUsage",
    "ArticleRecord",
    "Candidate",
    "CandidateDiagnostic",
    "CandidateOutcome",
    "DEFAULT_HEADLINE",
    "DerivedFields",
    "ExtractedArticle",
    "FeedEntry",
    "Headline",
    "IngestResult",
    "InsertOutcome",
    "SourceDescriptor",
    "SourceDiagnostic",
    "Topic",
    "UNTITLED",
    "Usage",
]
