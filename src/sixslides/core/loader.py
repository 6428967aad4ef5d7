"""Loading documents from local files or URLs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from ..http.client import AsyncHttpClient
from ..http.protocols import HttpClient
from ..models.config import NetworkConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedDocument:
    """
    Raw document bytes with the locator they came from.

    Attributes:
        content: Document bytes (HTML or Markdown)
        locator: Final URL, or the file's ``file://`` URI
        content_type: Media type for URLs (no charset), empty for files
    """

    content: bytes
    locator: str
    content_type: str = ""


def is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


async def load_document(
    source: str,
    client: Optional[HttpClient] = None,
    network: Optional[NetworkConfig] = None,
) -> LoadedDocument:
    """
    Load a document from a path or an http(s) URL.

    Args:
        source: Local file path or URL
        client: HTTP client to use for URLs (a new AsyncHttpClient if None)
        network: Retry, timeout and User-Agent settings for a new client

    Returns:
        LoadedDocument

    Raises:
        FileNotFoundError: If a local path does not exist
        aiohttp.ClientError: On HTTP errors after retries
        ContentTooLargeError: If the document exceeds the size limit
    """
    if not is_url(source):
        path = Path(source).expanduser()
        if not path.is_file():
            raise FileNotFoundError(f"No such file: {source}")
        logger.debug(f"Reading {path}")
        return LoadedDocument(content=path.read_bytes(), locator=path.resolve().as_uri())

    if client is not None:
        return await _fetch(client, source, network)

    network = network or NetworkConfig()
    async with AsyncHttpClient(
        max_retries=network.max_retries,
        user_agent=network.user_agent,
        default_timeout=network.timeout,
    ) as http_client:
        return await _fetch(http_client, source, network)


async def _fetch(client: HttpClient, url: str, network: Optional[NetworkConfig]) -> LoadedDocument:
    logger.debug(f"Fetching {url}")
    response = await client.get(url, timeout=network.timeout if network else None)
    return LoadedDocument(content=response.content, locator=response.url or url, content_type=response.media_type)
