# src/better_fetch/transports/requests_transport.py
"""
Транспорт на requests.Session.

Синхронный вызов выполняется в thread pool, чтобы не блокировать event loop.
При отмене через AbortSignal ответ потока отбрасывается.
"""

import asyncio
import functools
from typing import Any, Dict, Optional

import requests

from ..core.abort import race_abort
from ..core.exceptions import ConnectionError, TimeoutError, TransportError
from ..core.options import FetchOptions
from ..core.response import FetchResponse


def classify_requests_exception(exc: Exception, url: str) -> TransportError:
    """
    Конвертировать requests.exceptions в наши исключения.

    Examples:
        >>> exc = requests.exceptions.ConnectTimeout()
        >>> classify_requests_exception(exc, "https://example.com").timeout_type
        'connect'
    """
    if isinstance(exc, requests.exceptions.ConnectTimeout):
        return TimeoutError("Connect timeout", url, timeout_type="connect")

    elif isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError("Request timeout", url, timeout_type="read")

    elif isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError("Connection error", url)

    else:
        return TransportError(f"Request failed: {exc}", url)


class RequestsFetch:
    """
    Fetch-совместимый транспорт на requests.

    Args:
        session: Готовая requests.Session (не закрывается транспортом)

    Example:
        >>> with requests.Session() as session:
        ...     data, error = await better_fetch(url, custom_fetch_impl=RequestsFetch(session))
    """

    def __init__(self, session: Optional[requests.Session] = None):
        self._session = session

    async def __call__(self, url: str, options: FetchOptions) -> FetchResponse:
        loop = asyncio.get_running_loop()
        call = functools.partial(self._request, url, options)
        try:
            response = await race_abort(loop.run_in_executor(None, call), options.signal, url)
        except requests.exceptions.RequestException as e:
            raise classify_requests_exception(e, url) from e
        return FetchResponse.from_requests(response)

    def _request(self, url: str, options: FetchOptions) -> requests.Response:
        kwargs: Dict[str, Any] = dict(options.transport_options)
        if options.body is not None:
            kwargs["data"] = options.body
        headers = dict(options.headers.items()) if options.headers is not None else None

        if self._session is not None:
            return self._session.request(options.method or "GET", url, headers=headers, **kwargs)
        with requests.Session() as session:
            return session.request(options.method or "GET", url, headers=headers, **kwargs)

    def __repr__(self):
        return f"RequestsFetch(session={self._session!r})"
