"""Transport types shared by the document loader and its HTTP clients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class HttpResponse:
    """
    A fetched document.

    Attributes:
        status_code: Final HTTP status
        content: Body bytes, undecoded (the loader sniffs the charset)
        content_type: Content-Type header, empty when the server sent none
        url: URL after redirects; becomes the document's locator
    """

    status_code: int
    content: bytes
    content_type: str
    url: str

    @property
    def media_type(self) -> str:
        """Content type without parameters, lower-cased."""
        return self.content_type.split(";", 1)[0].strip().lower()


class HttpClient(Protocol):
    """Anything that can GET a document; the loader accepts a mock in tests."""

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
    ) -> HttpResponse: ...
