# src/better_fetch/transports/httpx_transport.py
"""
Транспорт по умолчанию на базе httpx.

Без переданного клиента на каждый запрос открывается и закрывается
собственный httpx.AsyncClient (пулинг соединений вне задач better-fetch).
"""

from typing import Any, Dict, Mapping, Optional

import httpx

from ..core.abort import race_abort
from ..core.exceptions import ConnectionError, TimeoutError, TransportError
from ..core.options import FetchOptions
from ..core.response import FetchResponse


def classify_httpx_exception(exc: Exception, url: str) -> TransportError:
    """
    Конвертировать исключения httpx в наши.

    Examples:
        >>> err = classify_httpx_exception(httpx.ConnectTimeout("boom"), "https://x")
        >>> isinstance(err, TimeoutError), err.timeout_type
        (True, 'connect')
    """
    if isinstance(exc, httpx.ConnectTimeout):
        return TimeoutError(str(exc) or "Connect timeout", url, timeout_type="connect")
    elif isinstance(exc, httpx.ReadTimeout):
        return TimeoutError(str(exc) or "Read timeout", url, timeout_type="read")
    elif isinstance(exc, httpx.WriteTimeout):
        return TimeoutError(str(exc) or "Write timeout", url, timeout_type="write")
    elif isinstance(exc, httpx.PoolTimeout):
        return TimeoutError(str(exc) or "Pool timeout", url, timeout_type="pool")
    elif isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError)):
        return ConnectionError(str(exc) or "Connection error", url)
    else:
        return TransportError(f"Request failed: {exc}", url)


def body_kwargs(body: Any) -> Dict[str, Any]:
    """Аргументы httpx для тела запроса."""
    if body is None:
        return {}
    if isinstance(body, Mapping):
        # Не-JSON dict (например form-urlencoded) - отдаём как форму
        return {"data": dict(body)}
    return {"content": body}


class HttpxFetch:
    """
    Fetch-совместимый транспорт на httpx.AsyncClient.

    Args:
        client: Готовый AsyncClient (не закрывается транспортом)
        **client_kwargs: Аргументы для AsyncClient, создаваемого на запрос

    Example:
        >>> async with httpx.AsyncClient(http2=False) as client:
        ...     data, error = await better_fetch(url, fetch=HttpxFetch(client))
    """

    def __init__(self, client: Optional[httpx.AsyncClient] = None, **client_kwargs: Any):
        self._client = client
        self._client_kwargs = client_kwargs

    async def __call__(self, url: str, options: FetchOptions) -> FetchResponse:
        if self._client is not None:
            return await self._send(self._client, url, options)

        async with httpx.AsyncClient(**self._client_kwargs) as client:
            return await self._send(client, url, options)

    async def _send(self, client: httpx.AsyncClient, url: str, options: FetchOptions) -> FetchResponse:
        extra = dict(options.transport_options)
        request = client.build_request(
            options.method or "GET",
            url,
            headers=options.headers,
            **body_kwargs(options.body),
            **extra,
        )
        try:
            response = await race_abort(client.send(request), options.signal, url)
        except httpx.HTTPError as e:
            raise classify_httpx_exception(e, url) from e
        return FetchResponse.from_httpx(response)

    def __repr__(self):
        return f"HttpxFetch(client={self._client!r})"
