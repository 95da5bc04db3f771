"""Result envelope returned by better_fetch."""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterator, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    Either ``data`` or ``error`` is set, never both.

    ``error`` is the parsed error body merged with ``status`` and ``status_text``.

    Example:
        >>> data, error = await better_fetch("https://api.example.com/users")
        >>> if error:
        ...     print(error["status"], error.get("message"))
    """
    data: Optional[T] = None
    error: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __iter__(self) -> Iterator[Any]:
        yield self.data
        yield self.error

    @classmethod
    def success(cls, data: T) -> "FetchResult[T]":
        return cls(data=data, error=None)

    @classmethod
    def failure(cls, status: int, status_text: str, body: Optional[Dict[str, Any]] = None) -> "FetchResult[T]":
        error = dict(body or {})
        error["status"] = status
        error["status_text"] = status_text
        return cls(data=None, error=error)
