"""Transports: async callables ``(url, options) -> FetchResponse``."""

from .httpx_transport import HttpxFetch, classify_httpx_exception
from .requests_transport import RequestsFetch, classify_requests_exception

__all__ = [
    "HttpxFetch",
    "RequestsFetch",
    "classify_httpx_exception",
    "classify_requests_exception",
]
