"""
FetchLogger - structured logger used by the request executor.
"""

import logging
import weakref
from typing import Any, Optional

from ...utils.sanitizer import mask_sensitive_data
from .config import LoggingConfig, LogLevel
from .filters import CorrelationIdFilter, ExtraFieldsFilter
from .formatters import get_formatter
from .handlers import create_console_handler, create_file_handler

# Обработчики, созданные FetchLogger
_owned_handlers: "weakref.WeakSet[logging.Handler]" = weakref.WeakSet()


class FetchLogger:
    """
    Structured logger with masked extra fields.

    Keyword arguments of the log methods become record attributes; sensitive
    values (tokens, passwords, auth headers) are masked first.

    Example:
        >>> logger = FetchLogger(LoggingConfig.create(level="DEBUG", format="json"))
        >>> logger.debug("Request started", method="GET", url="https://api.com")
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "better_fetch"):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        level = self._get_level(self.config.level)
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.propagate = False

        # Повторная инициализация с тем же именем заменяет свои обработчики
        self._close_handlers()

        filters = []
        if self.config.enable_correlation_id:
            filters.append(CorrelationIdFilter())
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)

        if self.config.enable_console:
            self._add_handler(create_console_handler(level, formatter, filters))

        if self.config.enable_file and self.config.file_path:
            self._add_handler(create_file_handler(
                file_path=self.config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=self.config.max_bytes,
                backup_count=self.config.backup_count,
                filters=filters
            ))

    @staticmethod
    def _get_level(level: LogLevel) -> int:
        return getattr(logging, LogLevel(level).value)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def _log(self, level: int, message: str, kwargs: Any, exc_info: bool = False) -> None:
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(level, message, extra=mask_sensitive_data(kwargs), exc_info=exc_info)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log at ERROR with the current exception's traceback."""
        self._log(logging.ERROR, message, kwargs, exc_info=True)

    def _add_handler(self, handler: logging.Handler) -> None:
        _owned_handlers.add(handler)
        self._logger.addHandler(handler)

    def _close_handlers(self) -> None:
        # Чужие обработчики (например NullHandler пакета) не трогаем
        for handler in self._logger.handlers[:]:
            if handler not in _owned_handlers:
                continue
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

    def close(self) -> None:
        """
        Flush and close all handlers. Idempotent.

        Example:
            >>> with FetchLogger(config) as logger:
            ...     logger.info("Processing...")
        """
        if self._closed:
            return
        self._close_handlers()
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


_default_logger: Optional[FetchLogger] = None


def get_logger(config: Optional[LoggingConfig] = None) -> FetchLogger:
    """
    Global logger instance, created on first call.

    ``config`` is only used when the logger does not exist yet.
    """
    global _default_logger

    if _default_logger is None:
        _default_logger = FetchLogger(config)

    return _default_logger


def configure_logging(config: LoggingConfig) -> FetchLogger:
    """Replace the global logger with a new configuration."""
    global _default_logger
    if _default_logger is not None:
        _default_logger.close()
    _default_logger = FetchLogger(config)
    return _default_logger
