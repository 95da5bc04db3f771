"""
Structured logging for better-fetch.

Example:
    >>> from better_fetch.core.logging import LoggingConfig
    >>>
    >>> options = FetchOptions.create(
    ...     base_url="https://api.example.com",
    ...     logging=LoggingConfig.create(level="DEBUG", format="json"),
    ... )
    >>> await better_fetch("/users", options)  # logs attempts, responses, retries
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import FetchLogger, get_logger, configure_logging
from .formatters import JSONFormatter, TextFormatter, get_formatter
from .filters import (
    CorrelationIdFilter,
    ExtraFieldsFilter,
    set_correlation_id,
    get_correlation_id,
    clear_correlation_id,
)
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "FetchLogger",
    "get_logger",
    "configure_logging",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
    # Filters
    "CorrelationIdFilter",
    "ExtraFieldsFilter",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
