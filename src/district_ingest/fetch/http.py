"""HTTP page fetcher built on httpx."""

import asyncio
import logging
from types import TracebackType

import httpx

from district_ingest.data import Usage

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; DistrictBot/1.2; +https://districtnews.ai)"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024


class _BodyTooLarge(Exception):
    pass


def _is_textual(content_type: str) -> bool:
    ct = content_type.lower()
    if not ct:
        return True
    return ct.startswith("text/") or any(kind in ct for kind in ("xml", "html", "json"))


class HttpFetcher:
    """Fetch pages over HTTP with a browser-like identity and a size cap.

    One ``httpx.AsyncClient`` is shared by every request and follows
    redirects. Failures of any kind (non-2xx status, transport error,
    timeout, oversize or non-textual body) return None and are logged; no
    retries are attempted.

    Args:
        user_agent: Value of the User-Agent header.
        max_bytes: Bodies larger than this are abandoned.
        client: Optional preconfigured client (tests inject a MockTransport).
    """

    def __init__(
        self,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        max_bytes: int = DEFAULT_MAX_BYTES,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._max_bytes = max_bytes
        self._client = client or httpx.AsyncClient(follow_redirects=True)
        self._headers = {"User-Agent": user_agent, "Accept": "*/*"}
        self._requests = 0
        self._failures = 0

    async def __aenter__(self) -> "HttpFetcher":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def take_usage(self) -> Usage:
        """Return request counts accumulated since the last call and reset them."""
        usage = Usage(http_requests=self._requests, http_failures=self._failures)
        self._requests = 0
        self._failures = 0
        return usage

    async def fetch(self, url: str, *, timeout: float) -> str | None:
        """Fetch a URL and return its decoded body, or None on failure.

        Args:
            url: Absolute http(s) URL.
            timeout: Overall deadline in seconds, covering connect and body.

        Returns:
            Body text decoded with the response charset (UTF-8 by default).
        """
        self._requests += 1
        try:
            body = await asyncio.wait_for(self._get(url, timeout), timeout=timeout)
        except (TimeoutError, httpx.TimeoutException):
            logger.warning(f"Timed out fetching {url}")
        except httpx.HTTPStatusError as e:
            logger.warning(f"HTTP {e.response.status_code} fetching {url}")
        except _BodyTooLarge:
            logger.warning(f"Body of {url} exceeds {self._max_bytes} bytes")
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning(f"Error fetching {url}: {e}")
        else:
            if body is not None:
                return body
        self._failures += 1
        return None

    async def _get(self, url: str, timeout: float) -> str | None:
        async with self._client.stream(
            "GET", url, headers=self._headers, timeout=httpx.Timeout(timeout)
        ) as response:
            response.raise_for_status()

            content_type = response.headers.get("content-type", "")
            if not _is_textual(content_type):
                logger.warning(f"Skipping {url}: non-text content type {content_type!r}")
                return None

            declared = response.headers.get("content-length", "")
            if declared.isdigit() and int(declared) > self._max_bytes:
                raise _BodyTooLarge

            chunks: list[bytes] = []
            size = 0
            async for chunk in response.aiter_bytes():
                size += len(chunk)
                if size > self._max_bytes:
                    raise _BodyTooLarge
                chunks.append(chunk)

            encoding = response.charset_encoding or "utf-8"
            raw = b"".join(chunks)
            try:
                return raw.decode(encoding, errors="replace")
            except LookupError:
                return raw.decode("utf-8", errors="replace")
