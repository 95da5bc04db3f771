# src/better_fetch/plugins/logging_plugin.py

import logging
from typing import Any, Optional

from ..core.context import RequestContext, ResponseContext
from ..core.options import FetchOptions
from ..core.pipeline import maybe_await
from ..utils.sanitizer import mask_sensitive_data, mask_url
from .plugin import Plugin, PluginResult

logger = logging.getLogger(__name__)


class LoggingPlugin(Plugin):
    """
    Плагин для логирования запросов и ответов через хуки жизненного цикла.

    Хуки пользователя не заменяются: логирующие хуки вызываются первыми,
    затем исходные. URL и заголовки маскируются перед записью в лог.

    Example:
        >>> await better_fetch(url, plugins=[LoggingPlugin(log_bodies=True)])
    """

    def __init__(self, log: Optional[logging.Logger] = None, log_bodies: bool = False):
        """
        Args:
            log: Логгер (по умолчанию better_fetch.plugins.logging_plugin)
            log_bodies: Писать тела запросов в DEBUG
        """
        self.log = log or logger
        self.log_bodies = log_bodies

    async def transform(self, url: str, options: FetchOptions) -> PluginResult:
        return PluginResult(url, options.replace(
            on_request=self._chain(self._on_request, options.on_request),
            on_response=self._chain(self._on_response, options.on_response),
            on_error=self._chain(self._on_error, options.on_error),
            on_retry=self._chain(self._on_retry, options.on_retry),
        ))

    @staticmethod
    def _chain(first, second):
        if second is None:
            return first

        async def hook(context: Any) -> None:
            await maybe_await(first(context))
            await maybe_await(second(context))

        return hook

    def _on_request(self, context: RequestContext) -> None:
        self.log.info(f"Sending {context.method} request to {mask_url(context.url)}")
        if self.log.isEnabledFor(logging.DEBUG):
            self.log.debug(f"Request headers: {mask_sensitive_data(dict(context.headers.items()))}")
            if self.log_bodies and context.body is not None:
                self.log.debug(f"Request body: {mask_sensitive_data(context.body)}")

    def _on_response(self, context: ResponseContext) -> None:
        response = context.response
        self.log.info(f"Received response: {response.status} from {mask_url(response.url)}")

    def _on_error(self, context: ResponseContext) -> None:
        response = context.response
        self.log.error(f"Request failed with status {response.status} {response.status_text}")

    def _on_retry(self, context: ResponseContext) -> None:
        self.log.warning(f"Retrying request (attempt {context.attempt + 1})")
