"""HTTP client for loading documents from URLs."""

from .client import AsyncHttpClient, ContentTooLargeError
from .protocols import HttpClient, HttpResponse

__all__ = [
    "AsyncHttpClient",
    "ContentTooLargeError",
    "HttpClient",
    "HttpResponse",
]
