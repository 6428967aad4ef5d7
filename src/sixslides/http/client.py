"""aiohttp client for fetching source documents."""

from __future__ import annotations

import asyncio
import logging
import random
from types import TracebackType

import aiohttp

from .protocols import HttpResponse

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; sixslides/1.0; +https://notion-slides.com)"

# Notion pages and rendered READMEs are HTML; raw files may come back as markdown or plain text
DOCUMENT_ACCEPT = "text/html,application/xhtml+xml,text/markdown;q=0.9,text/plain;q=0.8,*/*;q=0.5"


class ContentTooLargeError(ValueError):
    """The document exceeded the client's size limit."""


def backoff_delay(attempt: int, base_delay: float) -> float:
    """
    Delay before retry ``attempt`` (0-indexed).

    Exponential in the attempt number with up to one ``base_delay`` of jitter.
    """
    return base_delay * (2**attempt) + random.uniform(0, base_delay)


class AsyncHttpClient:
    """
    Fetches one document per call, retrying transient failures.

    - 429 and 5xx gateway statuses are retried with exponential backoff,
      as are dropped connections and timeouts
    - other HTTP errors raise ``aiohttp.ClientResponseError`` at once
    - bodies larger than ``max_content_size`` raise ContentTooLargeError

    Example:
        async with AsyncHttpClient(max_retries=2) as client:
            response = await client.get("https://raw.githubusercontent.com/org/repo/main/talk.md")
            deck = response.content.decode()
    """

    MAX_CONTENT_SIZE = 20 * 1024 * 1024  # 20 MB

    RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

    RETRYABLE_EXCEPTIONS = (
        aiohttp.ClientConnectionError,
        aiohttp.ClientPayloadError,
        asyncio.TimeoutError,
        ConnectionError,
    )

    def __init__(
        self,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
        max_content_size: int = MAX_CONTENT_SIZE,
        user_agent: str | None = None,
        default_timeout: float = 30.0,
    ) -> None:
        self._max_retries = max_retries
        self._retry_base_delay = retry_base_delay
        self._max_content_size = max_content_size
        self._default_timeout = default_timeout
        self._headers = {
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
            "Accept": DOCUMENT_ACCEPT,
        }
        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AsyncHttpClient:
        self._session = aiohttp.ClientSession(headers=self._headers)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
    ) -> HttpResponse:
        """
        Fetch a document.

        Args:
            url: Document URL
            timeout: Total request timeout in seconds (client default if None)

        Returns:
            HttpResponse carrying the body and the URL after redirects

        Raises:
            aiohttp.ClientError: On HTTP or network errors once retries run out
            ContentTooLargeError: If the body exceeds the size limit
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        client_timeout = aiohttp.ClientTimeout(total=timeout or self._default_timeout)
        attempts = self._max_retries + 1

        for attempt in range(attempts):
            final_attempt = attempt == attempts - 1
            try:
                async with self._session.get(url, timeout=client_timeout, allow_redirects=True) as response:
                    if response.status in self.RETRYABLE_STATUS_CODES and not final_attempt:
                        await self._wait_before_retry(url, attempt, f"HTTP {response.status}")
                        continue
                    response.raise_for_status()

                    return HttpResponse(
                        status_code=response.status,
                        content=await self._read_body(response),
                        content_type=response.headers.get("Content-Type", ""),
                        url=str(response.url),
                    )
            except self.RETRYABLE_EXCEPTIONS as e:
                if final_attempt:
                    logger.error(f"Giving up on {url} after {attempts} attempts: {e}")
                    raise
                await self._wait_before_retry(url, attempt, str(e) or type(e).__name__)

        raise RuntimeError(f"Unexpected error fetching {url}")

    async def _read_body(self, response: aiohttp.ClientResponse) -> bytes:
        declared = response.headers.get("Content-Length")
        if declared and declared.isdigit() and int(declared) > self._max_content_size:
            raise ContentTooLargeError(f"Document too large: {declared} bytes")

        body = bytearray()
        async for chunk in response.content.iter_chunked(8192):
            body.extend(chunk)
            if len(body) > self._max_content_size:
                raise ContentTooLargeError(f"Document exceeds {self._max_content_size} bytes")
        return bytes(body)

    async def _wait_before_retry(self, url: str, attempt: int, reason: str) -> None:
        delay = backoff_delay(attempt, self._retry_base_delay)
        logger.warning(
            f"Fetching {url} failed ({reason}), retry {attempt + 1}/{self._max_retries} in {delay:.1f}s"
        )
        await asyncio.sleep(delay)
