"""
Конфигурация вызова better_fetch.

FetchOptions - immutable (frozen dataclass). Каждая стадия конвейера
получает и возвращает новое значение через FetchOptions.replace.

FetchOptions помнит, какие поля были заданы явно: при merge побеждают
именно они, даже если значение совпадает со значением по умолчанию.
"""

import dataclasses
import functools
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    FrozenSet,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)
from urllib.parse import urlparse

import httpx

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .abort import AbortSignal
    from .context import RequestContext, ResponseContext
    from .logging import FetchLogger, LoggingConfig

RequestHook = Callable[["RequestContext"], Union[None, Awaitable[None]]]
ResponseHook = Callable[["ResponseContext"], Union[None, Awaitable[None]]]
JSONParser = Callable[[str], Any]

HeadersInput = Union[Mapping[str, str], Sequence[Tuple[str, str]], httpx.Headers, None]

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HEADERS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def merge_headers(base: HeadersInput, override: HeadersInput) -> Optional[httpx.Headers]:
    """
    Объединить два набора заголовков (case-insensitive, побеждает override).

    Args:
        base: Заголовки базовой конфигурации
        override: Заголовки конкретного вызова

    Returns:
        httpx.Headers или None, если оба набора пустые

    Example:
        >>> merged = merge_headers({"Accept": "text/html"}, {"accept": "application/json"})
        >>> merged["accept"]
        'application/json'
    """
    if base is None and override is None:
        return None
    merged = httpx.Headers(base or {})
    for key, value in httpx.Headers(override or {}).items():
        merged[key] = value
    return merged

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# OPTIONS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _track_explicit_fields(cls):
    """Записать в _explicit имена полей, переданных в конструктор."""
    init = cls.__init__
    names = [f.name for f in dataclasses.fields(cls) if f.init]

    @functools.wraps(init)
    def __init__(self, *args, **kwargs):
        init(self, *args, **kwargs)
        object.__setattr__(self, '_explicit', frozenset(names[:len(args)]).union(kwargs))

    cls.__init__ = __init__
    return cls


@_track_explicit_fields
@dataclass(frozen=True)
class FetchOptions:
    """
    Настройки одного вызова better_fetch.

    Args:
        base_url: Префикс, который конкатенируется с URL (без нормализации слешей)
        headers: Заголовки запроса
        body: Тело запроса (dict/list сериализуются в JSON)
        query: Параметры, добавляемые в query string
        method: HTTP метод (по умолчанию GET, или POST при наличии body)
        timeout: Таймаут (сек), по истечении которого попытка отменяется
        retry: Сколько раз повторить запрос при ok=False
        plugins: Упорядоченный список плагинов
        on_request/on_response/on_success/on_error/on_retry: Хуки жизненного цикла
        json_parser: Парсер текста ответа (sync или async)
        output_validator: Валидатор успешного ответа (parse(value) -> T)
        throw: Выбрасывать FetchError вместо конверта с ошибкой
        duplex: Режим duplex для потоковых тел ('half' / 'full')
        signal: Внешний AbortSignal (отключает timeout)
        custom_fetch_impl: Транспорт, имеющий приоритет над fetch
        fetch: Транспорт по умолчанию для этого вызова
        abort_controller: Фабрика AbortController
        headers_class: Фабрика набора заголовков
        transport_options: Дополнительные kwargs для транспорта
        logger: FetchLogger для структурированного логирования

    Examples:
        >>> FetchOptions(base_url="https://api.example.com", retry=2)
        >>> FetchOptions.create(base_url="https://api.example.com", timeout=5)
    """
    base_url: Optional[str] = None
    headers: HeadersInput = None
    body: Any = None
    query: Optional[Mapping[str, Any]] = None
    method: Optional[str] = None
    timeout: Optional[float] = None
    retry: int = 0
    plugins: Tuple[Any, ...] = ()

    on_request: Optional[RequestHook] = None
    on_response: Optional[ResponseHook] = None
    on_success: Optional[ResponseHook] = None
    on_error: Optional[ResponseHook] = None
    on_retry: Optional[ResponseHook] = None

    json_parser: Optional[JSONParser] = None
    output_validator: Any = None
    throw: bool = False

    duplex: Optional[str] = None
    signal: Optional["AbortSignal"] = None

    custom_fetch_impl: Optional[Callable[..., Awaitable[Any]]] = None
    fetch: Optional[Callable[..., Awaitable[Any]]] = None
    abort_controller: Optional[Callable[[], Any]] = None
    headers_class: Optional[Callable[[Any], Any]] = None
    transport_options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    logger: Optional["FetchLogger"] = field(default=None, compare=False, repr=False)

    _explicit: FrozenSet[str] = field(default=frozenset(), init=False, compare=False, repr=False)

    def __post_init__(self):
        """Заморозить изменяемые коллекции."""
        if isinstance(self.plugins, list):
            object.__setattr__(self, 'plugins', tuple(self.plugins))
        if isinstance(self.transport_options, dict):
            object.__setattr__(self, 'transport_options', MappingProxyType(dict(self.transport_options)))
        if self.retry is None:
            object.__setattr__(self, 'retry', 0)

    @classmethod
    def create(
        cls,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        retry: Optional[int] = None,
        headers: HeadersInput = None,
        logging: Optional['LoggingConfig'] = None,
        **kwargs
    ) -> 'FetchOptions':
        """
        Удобный конструктор с валидацией.

        Args:
            base_url: Базовый URL
            timeout: Таймаут попытки (сек)
            retry: Количество повторов
            headers: Заголовки
            logging: Конфигурация логирования (None = без логирования)
            **kwargs: Остальные поля FetchOptions

        Returns:
            FetchOptions instance

        Raises:
            ConfigurationError: Невалидные значения или неизвестные поля

        Examples:
            >>> options = FetchOptions.create(base_url="https://api.example.com", retry=3)
            >>> options = FetchOptions.create(logging=LoggingConfig.create(level="DEBUG"))
        """
        if timeout is not None and timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if retry is not None and retry < 0:
            raise ConfigurationError("retry must be non-negative")

        unknown = set(kwargs) - _init_field_names()
        if unknown:
            raise ConfigurationError(f"Unknown options: {', '.join(sorted(unknown))}")

        if logging is not None and kwargs.get('logger') is None:
            from .logging import FetchLogger

            kwargs['logger'] = FetchLogger(config=logging, name=_logger_name(base_url))

        # Не переданные аргументы не считаются явно заданными
        given = {'base_url': base_url, 'timeout': timeout, 'retry': retry, 'headers': headers}
        kwargs.update({name: value for name, value in given.items() if value is not None})
        return cls(**kwargs)

    @property
    def explicit_fields(self) -> FrozenSet[str]:
        """Имена полей, заданных явно (конструктор, create, merge, replace)."""
        return self._explicit

    def merge(self, overrides: Optional[Union['FetchOptions', Mapping[str, Any]]] = None) -> 'FetchOptions':
        """
        Наложить настройки вызова поверх базовых.

        Побеждают явно заданные поля overrides, в том числе равные значениям
        по умолчанию (retry=0, throw=False, timeout=None). Заголовки
        объединяются через merge_headers, остальные поля заменяются целиком
        (без рекурсивного слияния).

        Args:
            overrides: FetchOptions или dict с полями FetchOptions

        Returns:
            Новый FetchOptions

        Example:
            >>> base = FetchOptions(base_url="https://a.com", retry=2)
            >>> base.merge(FetchOptions(retry=0)).retry
            0
        """
        if overrides is None:
            return self
        if isinstance(overrides, FetchOptions):
            changes = {name: getattr(overrides, name) for name in overrides.explicit_fields}
        else:
            changes = dict(overrides)
            unknown = set(changes) - _init_field_names()
            if unknown:
                raise ConfigurationError(f"Unknown options: {', '.join(sorted(unknown))}")

        if 'headers' in changes:
            changes['headers'] = merge_headers(self.headers, changes['headers'])
        return self.replace(**changes)

    def replace(self, **changes: Any) -> 'FetchOptions':
        """Вернуть копию с изменёнными полями (они становятся явно заданными)."""
        updated = dataclasses.replace(self, **changes)
        object.__setattr__(updated, '_explicit', self._explicit.union(changes))
        return updated

    def with_headers(self, headers: HeadersInput) -> 'FetchOptions':
        """
        Создать новые options с дополнительными заголовками.

        Example:
            >>> options = options.with_headers({"Authorization": "Bearer t"})
        """
        return self.replace(headers=merge_headers(self.headers, headers))

    def with_retry(self, retry: int) -> 'FetchOptions':
        return self.replace(retry=retry)

    def with_timeout(self, timeout: Optional[float]) -> 'FetchOptions':
        return self.replace(timeout=timeout)


_DEFAULTS = FetchOptions()


def _init_field_names() -> FrozenSet[str]:
    return frozenset(f.name for f in dataclasses.fields(FetchOptions) if f.init)


def _logger_name(base_url: Optional[str]) -> str:
    # Имя логгера по домену base_url для уникальности
    if base_url:
        domain = urlparse(base_url).netloc
        if domain:
            return f"better_fetch.{domain}"
    return "better_fetch"


def resolve_options(
    options: Optional[Union[FetchOptions, Mapping[str, Any]]] = None,
    **overrides: Any
) -> FetchOptions:
    """
    Собрать FetchOptions вызова из options и именованных аргументов.

    Example:
        >>> resolve_options(FetchOptions(retry=1), body={"a": 1}).body
        {'a': 1}
    """
    if options is None:
        base = _DEFAULTS
    elif isinstance(options, FetchOptions):
        base = options
    else:
        base = _DEFAULTS.merge(options)
    return base.merge(overrides) if overrides else base
