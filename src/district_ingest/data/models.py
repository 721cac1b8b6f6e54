"""Core data models for District news ingestion."""

from dataclasses import dataclass, field
from enum import StrEnum

UNTITLED = "Untitled"


class Topic(StrEnum):
    """Closed topic vocabulary. Every stored article carries exactly one."""

    BUSINESS = "Business"
    POLITICS = "Politics"
    SPORTS = "Sports"
    TECHNOLOGY = "Technology"
    STARTUPS = "Startups"
    ENTERTAINMENT = "Entertainment"
    INTERNATIONAL = "International"
    AUTOMOBILE = "Automobile"
    SCIENCE = "Science"
    TRAVEL = "Travel"
    FASHION = "Fashion"
    EDUCATION = "Education"
    HEALTH_AND_FITNESS = "Health & Fitness"
    MISCELLANEOUS = "Miscellaneous"


class InsertOutcome(StrEnum):
    """Result of a single store insert."""

    INSERTED = "inserted"
    CONFLICT = "conflict"
    ERROR = "error"


class CandidateOutcome(StrEnum):
    """What happened to one candidate URL during a run."""

    INSERTED = "inserted"
    ALREADY_SEEN = "already-seen"
    DUPLICATE_URL = "duplicate-url"
    UNEXTRACTABLE = "unextractable"
    DUPLICATE_TITLE = "duplicate-title"
    INSERT_CONFLICT = "insert-conflict"
    INSERT_ERROR = "insert-error"
    ERROR = "error"


@dataclass(frozen=True)
class SourceDescriptor:
    """A publisher to ingest from."""

    name: str
    homepage_url: str
    feed_url: str | None = None


@dataclass(frozen=True)
class FeedEntry:
    """One item parsed from an RSS or Atom feed."""

    title: str
    link: str
    description: str | None = None
    image_url: str | None = None
    published_at: str | None = None


@dataclass(frozen=True)
class Candidate:
    """A discovered article URL, with the feed entry it came from if any."""

    url: str
    entry: FeedEntry | None = None


@dataclass(frozen=True)
class ExtractedArticle:
    """Structured content pulled out of an article page.

    ``body_text`` is plain text: paragraphs separated by blank lines,
    whitespace collapsed inside each paragraph.
    """

    title: str
    description: str
    body_text: str
    image_url: str | None = None
    published_at: str | None = None


@dataclass(frozen=True)
class Headline:
    """Short headline / subheadline pair shown on article cards."""

    headline: str
    subheadline: str


DEFAULT_HEADLINE = Headline(headline="News Update", subheadline="Details inside")


@dataclass(frozen=True)
class DerivedFields:
    """Fields computed from the article body before insertion."""

    summary: str
    topic: Topic
    categories: tuple[str, ...]
    headline: Headline


@dataclass(frozen=True)
class ArticleRecord:
    """The persisted article. ``source_url`` is canonical and unique."""

    title: str
    summary: str
    source_url: str
    source_name: str
    topic: Topic
    categories: tuple[str, ...]
    headline: Headline
    image_url: str | None = None
    published_at: str | None = None


@dataclass(frozen=True)
class CandidateDiagnostic:
    """Outcome for one candidate URL."""

    url: str
    outcome: CandidateOutcome
    detail: str | None = None


@dataclass
class SourceDiagnostic:
    """Per-source record of what the run did."""

    source: str
    homepage_url: str
    feed_url: str | None = None
    feed_found: bool = False
    homepage_fetched: bool = False
    candidates_found: int = 0
    candidates: list[CandidateDiagnostic] = field(default_factory=list)
    skip_reason: str | None = None
    inserted_urls: list[str] = field(default_factory=list)
    error: str | None = None

    def record(self, url: str, outcome: CandidateOutcome, detail: str | None = None) -> None:
        self.candidates.append(CandidateDiagnostic(url=url, outcome=outcome, detail=detail))

    @property
    def store_failed(self) -> bool:
        """True when the store rejected an insert with an error and nothing was inserted."""
        return not self.inserted_urls and any(
            c.outcome == CandidateOutcome.INSERT_ERROR for c in self.candidates
        )


@dataclass(frozen=True)
class APICallUsage:
    """Usage from a single model API call."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0


@dataclass
class Usage:
    """Accumulated model and HTTP usage across a run."""

    api_calls: list[APICallUsage] = field(default_factory=list)
    http_requests: int = 0
    http_failures: int = 0

    @property
    def input_tokens(self) -> int:
        return sum(c.input_tokens for c in self.api_calls)

    @property
    def output_tokens(self) -> int:
        return sum(c.output_tokens for c in self.api_calls)

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            api_calls=self.api_calls + other.api_calls,
            http_requests=self.http_requests + other.http_requests,
            http_failures=self.http_failures + other.http_failures,
        )

    def __iadd__(self, other: "Usage") -> "Usage":
        self.api_calls.extend(other.api_calls)
        self.http_requests += other.http_requests
        self.http_failures += other.http_failures
        return self


@dataclass
class IngestResult:
    """Structured report returned by every ingestion run."""

    ok: bool
    inserted_count: int = 0
    inserted: list[ArticleRecord] = field(default_factory=list)
    diagnostics: list[SourceDiagnostic] = field(default_factory=list)
    message: str = ""
    usage: Usage = field(default_factory=Usage)
    error: str | None = None
