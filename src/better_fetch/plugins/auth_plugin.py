# src/better_fetch/plugins/auth_plugin.py

import base64
from typing import Any, Awaitable, Callable, Optional, Union

from ..core.exceptions import ConfigurationError
from ..core.options import FetchOptions
from ..core.pipeline import maybe_await
from .plugin import Plugin, PluginResult

TokenProvider = Callable[[], Union[str, Awaitable[str]]]


class AuthPlugin(Plugin):
    """Плагин для различных типов аутентификации"""

    def __init__(self, auth_type: str = "bearer", token: Optional[str] = None,
                 username: Optional[str] = None, password: Optional[str] = None,
                 token_provider: Optional[TokenProvider] = None,
                 header_name: str = "X-API-Key"):
        """
        Args:
            auth_type: Тип аутентификации ('bearer', 'basic', 'api_key')
            token: Токен для Bearer или API Key аутентификации
            username: Имя пользователя для Basic аутентификации
            password: Пароль для Basic аутентификации
            token_provider: Функция (sync/async), возвращающая свежий токен.
                Вызывается перед каждой попыткой, включая повторы.
            header_name: Заголовок для api_key
        """
        self.auth_type = auth_type.lower()
        if self.auth_type not in ("bearer", "basic", "api_key"):
            raise ConfigurationError(f"Unknown auth_type: {auth_type}")
        self.token = token
        self.username = username
        self.password = password
        self.token_provider = token_provider
        self.header_name = header_name

    async def transform(self, url: str, options: FetchOptions) -> PluginResult:
        """Добавляет заголовки аутентификации"""
        header = await self._header()
        if header is None:
            return PluginResult(url, options)
        name, value = header
        return PluginResult(url, options.with_headers({name: value}))

    async def _header(self) -> Optional[Any]:
        if self.auth_type == 'basic':
            if not (self.username and self.password):
                return None
            credentials = f"{self.username}:{self.password}".encode("utf-8")
            return "Authorization", f"Basic {base64.b64encode(credentials).decode('ascii')}"

        token = self.token
        if self.token_provider is not None:
            token = await maybe_await(self.token_provider())
        if not token:
            return None

        if self.auth_type == 'bearer':
            return "Authorization", f"Bearer {token}"
        return self.header_name, token

    def update_token(self, token: str):
        """Обновляет токен аутентификации"""
        self.token = token
