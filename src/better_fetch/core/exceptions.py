"""
Иерархия исключений better-fetch.

Классификация:
- TransportError - сбой транспорта (сеть, DNS, отмена). Ядро их не перехватывает.
- FetchError - HTTP ответ с ok=False при throw=True.
- Остальные - ошибки использования (URL, плагины, маршруты, конфигурация).
"""

from typing import Any, Dict, Optional

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class BetterFetchException(Exception):
    """Базовое исключение better-fetch."""

    def __init__(self, message: str, **kwargs):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ ТРАНСПОРТА
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportError(BetterFetchException):
    """
    Сбой транспорта: запрос не дошёл или ответ не был получен.

    Всегда пробрасывается вызывающему коду, независимо от throw.
    """

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = f"{message}"
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)

class ConnectionError(TransportError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - DNS resolution failed
    - Network unreachable
    """
    pass

class TimeoutError(TransportError):
    """
    Таймаут на уровне транспорта (connect/read таймаут библиотеки).

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        timeout_type: Тип таймаута ('connect', 'read', 'write', 'pool')
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        timeout_type: Optional[str] = None
    ):
        self.timeout_type = timeout_type

        msg = message
        if timeout_type:
            msg += f" ({timeout_type} timeout)"

        super().__init__(msg, url)

class AbortError(TransportError):
    """
    Запрос отменён через AbortSignal.

    Args:
        message: Сообщение
        url: URL
        reason: Причина отмены (то, что передали в AbortController.abort)
    """

    def __init__(
        self,
        message: str = "The operation was aborted",
        url: Optional[str] = None,
        reason: Any = None
    ):
        self.reason = reason
        super().__init__(message, url)

class RequestTimeoutError(AbortError):
    """
    Запрос отменён по истечении options.timeout.

    Args:
        timeout: Значение таймаута (сек)
        url: URL
    """

    def __init__(self, timeout: float, url: Optional[str] = None):
        self.timeout = timeout
        super().__init__(
            f"Request aborted after timeout of {timeout}s",
            url,
            reason="timeout"
        )

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HTTP ОШИБКИ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class FetchError(BetterFetchException):
    """
    HTTP ответ с ok=False, выброшенный при throw=True.

    Args:
        status: HTTP статус код
        status_text: Текст статуса (reason phrase)
        error: Разобранное тело ответа (dict) или None

    Examples:
        >>> try:
        ...     await better_fetch("/users/1", throw=True)
        ... except FetchError as e:
        ...     print(e.status, e.error)
        404 {'message': 'not found'}
    """

    def __init__(
        self,
        status: int,
        status_text: str,
        error: Optional[Dict[str, Any]] = None
    ):
        self.status = status
        self.status_text = status_text
        self.error = error

        msg = f"HTTP {status}"
        if status_text:
            msg += f" {status_text}"
        if error and error.get("message"):
            msg += f": {error['message']}"

        super().__init__(msg)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# ОШИБКИ ИСПОЛЬЗОВАНИЯ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class InvalidURLError(BetterFetchException):
    """Итоговый URL (base_url + url) не является абсолютным."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid URL: {url!r}")

class PluginError(BetterFetchException):
    """Плагин вернул значение неподдерживаемого типа."""

    def __init__(self, plugin: Any, result: Any):
        self.plugin = plugin
        self.result = result
        super().__init__(
            f"Plugin {plugin!r} must return PluginResult or (url, options), "
            f"got {type(result).__name__}"
        )

class UnknownRouteError(BetterFetchException):
    """URL не зарегистрирован в strict реестре маршрутов."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Unknown route: {url}")

class ConfigurationError(BetterFetchException):
    """Ошибка конфигурации."""
    pass
