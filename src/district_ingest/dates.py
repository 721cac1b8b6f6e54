"""Publication date parsing."""

from datetime import UTC, timedelta, timezone

from dateutil.parser import parse as parse_date

# Common timezone abbreviations
TZINFOS = {
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
    "GMT": UTC,
    "UTC": UTC,
    "BST": timezone(timedelta(hours=1)),
    "CET": timezone(timedelta(hours=1)),
    "CEST": timezone(timedelta(hours=2)),
    "MUT": timezone(timedelta(hours=4)),
}


def to_iso_utc(value: str | None) -> str | None:
    """Parse a free-form date string into an ISO-8601 UTC timestamp.

    Naive values are taken to be UTC. Returns None when the value is
    missing or cannot be parsed.
    """
    if not value or not value.strip():
        return None
    try:
        dt = parse_date(value.strip(), tzinfos=TZINFOS)
    except (ValueError, OverflowError, TypeError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat()
