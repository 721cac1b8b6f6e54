"""Page fetching."""

from district_ingest.fetch.base import Fetcher
from district_ingest.fetch.http import DEFAULT_MAX_BYTES, DEFAULT_USER_AGENT, HttpFetcher

__all__ = [
    "DEFAULT_MAX_BYTES",
    "DEFAULT_USER_AGENT",
    "Fetcher",
    "HttpFetcher",
]
