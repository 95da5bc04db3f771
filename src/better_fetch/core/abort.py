"""
Примитивы отмены запроса для asyncio.

AbortController создаётся на каждую попытку; транспорт ждёт либо ответа,
либо сигнала отмены (см. race_abort).
"""

import asyncio
import contextlib
from typing import Any, Awaitable, Optional, TypeVar

from .exceptions import AbortError

T = TypeVar("T")


class AbortSignal:
    """
    Сигнал отмены. Выставляется только через AbortController.

    Example:
        >>> controller = AbortController()
        >>> signal = controller.signal
        >>> signal.aborted
        False
        >>> controller.abort("user cancelled")
        >>> signal.aborted, signal.reason
        (True, 'user cancelled')
    """

    def __init__(self):
        self._event = asyncio.Event()
        self._reason: Any = None

    @property
    def aborted(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Any:
        return self._reason

    async def wait(self) -> Any:
        """Дождаться отмены и вернуть её причину."""
        await self._event.wait()
        return self._reason

    def throw_if_aborted(self, url: Optional[str] = None) -> None:
        if self.aborted:
            raise _abort_error(self._reason, url)

    def _abort(self, reason: Any) -> None:
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()

    def __repr__(self):
        return f"AbortSignal(aborted={self.aborted}, reason={self._reason!r})"


class AbortController:
    """Владелец AbortSignal. Повторный abort() игнорируется."""

    def __init__(self):
        self.signal = AbortSignal()

    def abort(self, reason: Any = None) -> None:
        if reason is None:
            reason = AbortError()
        self.signal._abort(reason)


def _abort_error(reason: Any, url: Optional[str]) -> AbortError:
    # Причиной может быть готовое исключение (например RequestTimeoutError)
    if isinstance(reason, AbortError):
        if url and reason.url is None:
            reason.url = url
        return reason
    return AbortError(url=url, reason=reason)


async def race_abort(
    awaitable: Awaitable[T],
    signal: Optional[AbortSignal],
    url: Optional[str] = None,
) -> T:
    """
    Выполнить awaitable, отменив его при срабатывании signal.

    Args:
        awaitable: Операция транспорта
        signal: Сигнал отмены (None - ждём без отмены)
        url: URL для сообщения об ошибке

    Returns:
        Результат awaitable

    Raises:
        AbortError: Сигнал сработал раньше, чем завершилась операция
    """
    if signal is None:
        return await awaitable

    operation = asyncio.ensure_future(awaitable)
    if signal.aborted:
        operation.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await operation
        raise _abort_error(signal.reason, url)

    waiter = asyncio.ensure_future(signal.wait())
    try:
        await asyncio.wait({operation, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        operation.cancel()
        waiter.cancel()
        raise

    if operation.done():
        waiter.cancel()
        return operation.result()

    operation.cancel()
    with contextlib.suppress(asyncio.CancelledError, Exception):
        await operation
    raise _abort_error(signal.reason, url)
