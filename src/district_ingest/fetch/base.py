"""Protocol for page fetching."""

from typing import Protocol


class Fetcher(Protocol):
    """Interface for retrieving the text body of a web page."""

    async def fetch(self, url: str, *, timeout: float) -> str | None:
        """Fetch a URL and return its decoded body.

        Args:
            url: Absolute http(s) URL.
            timeout: Seconds before giving up.

        Returns:
            The body text, or None on any failure. Never raises.
        """
        ...
