# src/better_fetch/plugins/plugin.py
"""
Базовый класс для плагинов.

Плагин - async преобразование (url, options) -> (url, options), которое
выполняется перед каждой попыткой запроса (включая повторы).
"""

from abc import ABC, abstractmethod
from typing import NamedTuple

from ..core.options import FetchOptions


class PluginResult(NamedTuple):
    """Результат плагина: новые url и options."""
    url: str
    options: FetchOptions


class Plugin(ABC):
    """
    Базовый класс для всех плагинов.

    Плагины выполняются строго в порядке регистрации, каждый видит
    результат предыдущего. Вместо подкласса можно передать любую
    функцию (sync или async) с той же сигнатурой.

    Example:
        >>> class VersionPlugin(Plugin):
        ...     async def transform(self, url, options):
        ...         return PluginResult(f"/v2{url}", options)
        ...
        >>> await better_fetch("/users", base_url=API, plugins=[VersionPlugin()])
    """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @abstractmethod
    async def transform(self, url: str, options: FetchOptions) -> PluginResult:
        """Вызывается перед построением запроса."""
        pass

    async def __call__(self, url: str, options: FetchOptions) -> PluginResult:
        return await self.transform(url, options)

    def __repr__(self):
        return f"{self.name}()"
