"""
Реестр маршрутов: URL -> схемы входа/выхода.

Fetcher подставляет валидатор ответа известного маршрута и делегирует вызов
в better_fetch.

Example:
    >>> class Todo(BaseModel):
    ...     id: int
    ...     title: str
    >>>
    >>> fetch = create_fetch(
    ...     FetchOptions(base_url="https://jsonplaceholder.typicode.com"),
    ...     routes={"/todos/1": RouteSchema(output=Todo)},
    ... )
    >>> todo, error = await fetch("/todos/1")
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from .core.capabilities import Transport, resolve_capabilities
from .core.exceptions import UnknownRouteError
from .core.executor import better_fetch
from .core.options import FetchOptions, resolve_options
from .core.result import FetchResult
from .core.validators import DEFAULT_VALIDATOR, as_validator

OptionsInput = Union[FetchOptions, Mapping[str, Any], None]


@dataclass(frozen=True)
class RouteSchema:
    """
    Схемы одного endpoint.

    Каждая схема - pydantic модель, TypeAdapter, объект с parse() или
    любой тип, понятный pydantic. None = без проверки.
    """
    input: Any = None
    query: Any = None
    output: Any = None


class Fetcher:
    """
    Вызываемый объект с базовой конфигурацией и реестром маршрутов.

    Порядок слияния настроек: config -> options вызова -> именованные аргументы.

    Args:
        config: Базовые FetchOptions (или dict)
        routes: Словарь URL -> RouteSchema
        strict: Неизвестный URL вызывает UnknownRouteError
        validate_input: Проверять body и query по схемам маршрута перед вызовом
    """

    def __init__(
        self,
        config: OptionsInput = None,
        routes: Optional[Mapping[str, RouteSchema]] = None,
        *,
        strict: bool = False,
        validate_input: bool = False,
    ):
        self.config = resolve_options(config)
        self.routes: Dict[str, RouteSchema] = dict(routes or {})
        self.strict = strict
        self.validate_input = validate_input

    @property
    def native(self) -> Transport:
        """Транспорт, которым будут выполняться запросы с базовой конфигурацией."""
        return resolve_capabilities(self.config).fetch

    def route(self, url: str) -> Optional[RouteSchema]:
        """Схема маршрута или None для неизвестного URL."""
        return self.routes.get(url)

    async def __call__(self, url: str, options: OptionsInput = None, **overrides: Any) -> FetchResult:
        call_options = self.config
        if options is not None:
            call_options = call_options.merge(options)
        if overrides:
            call_options = call_options.merge(overrides)

        schema = self.route(url)
        if schema is None and self.strict:
            raise UnknownRouteError(url)

        if schema is not None and schema.output is not None:
            validator = as_validator(schema.output)
        elif call_options.output_validator is not None:
            validator = as_validator(call_options.output_validator)
        else:
            validator = DEFAULT_VALIDATOR

        if schema is not None and self.validate_input:
            # pydantic.ValidationError пробрасывается как есть
            if schema.input is not None and call_options.body is not None:
                as_validator(schema.input).parse(call_options.body)
            if schema.query is not None and call_options.query is not None:
                as_validator(schema.query).parse(dict(call_options.query))

        return await better_fetch(url, call_options.replace(output_validator=validator))

    # ==================== Удобные методы ====================

    async def _send(self, method: str, url: str, options: OptionsInput, overrides: Dict[str, Any]) -> FetchResult:
        # Метод удобного вызова важнее method из overrides
        return await self(url, options, **{**overrides, "method": method})

    async def get(self, url: str, options: OptionsInput = None, **overrides: Any) -> FetchResult:
        """GET запрос."""
        return await self._send("GET", url, options, overrides)

    async def post(self, url: str, options: OptionsInput = None, **overrides: Any) -> FetchResult:
        """POST запрос."""
        return await self._send("POST", url, options, overrides)

    async def put(self, url: str, options: OptionsInput = None, **overrides: Any) -> FetchResult:
        """PUT запрос."""
        return await self._send("PUT", url, options, overrides)

    async def patch(self, url: str, options: OptionsInput = None, **overrides: Any) -> FetchResult:
        """PATCH запрос."""
        return await self._send("PATCH", url, options, overrides)

    async def delete(self, url: str, options: OptionsInput = None, **overrides: Any) -> FetchResult:
        """DELETE запрос."""
        return await self._send("DELETE", url, options, overrides)

    async def head(self, url: str, options: OptionsInput = None, **overrides: Any) -> FetchResult:
        """HEAD запрос."""
        return await self._send("HEAD", url, options, overrides)

    async def options(self, url: str, options: OptionsInput = None, **overrides: Any) -> FetchResult:
        """OPTIONS запрос."""
        return await self._send("OPTIONS", url, options, overrides)

    def __repr__(self):
        return f"Fetcher(base_url={self.config.base_url!r}, routes={len(self.routes)}, strict={self.strict})"


def create_fetch(
    config: OptionsInput = None,
    routes: Optional[Mapping[str, RouteSchema]] = None,
    *,
    strict: bool = False,
    validate_input: bool = False,
) -> Fetcher:
    """
    Создать Fetcher с базовой конфигурацией и маршрутами.

    Example:
        >>> fetch = create_fetch({"base_url": "https://api.example.com", "retry": 2})
        >>> data, error = await fetch.post("/signin", body={"username": "a"})
    """
    return Fetcher(config, routes, strict=strict, validate_input=validate_input)
