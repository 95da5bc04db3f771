"""
Выбор транспорта и конструкторов для вызова.

Разрешается один раз на попытку из FetchOptions, без глобального состояния.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import httpx

from .abort import AbortController
from .options import FetchOptions

Transport = Callable[[str, FetchOptions], Awaitable[Any]]


@dataclass(frozen=True)
class Capabilities:
    """
    Набор внешних возможностей, которыми пользуется ядро.

    Attributes:
        fetch: Транспорт (url, options) -> ответ
        abort_controller: Фабрика AbortController
        headers_class: Фабрика набора заголовков
    """
    fetch: Transport
    abort_controller: Callable[[], AbortController]
    headers_class: Callable[[Any], Any]


def default_transport() -> Transport:
    """Транспорт по умолчанию - httpx.AsyncClient на каждый запрос."""
    from ..transports.httpx_transport import HttpxFetch

    return HttpxFetch()


def resolve_capabilities(options: FetchOptions) -> Capabilities:
    """
    Приоритет транспорта: custom_fetch_impl > fetch > HttpxFetch.

    Example:
        >>> caps = resolve_capabilities(FetchOptions(custom_fetch_impl=my_fetch))
        >>> caps.fetch is my_fetch
        True
    """
    fetch = options.custom_fetch_impl or options.fetch or default_transport()
    return Capabilities(
        fetch=fetch,
        abort_controller=options.abort_controller or AbortController,
        headers_class=options.headers_class or httpx.Headers,
    )
