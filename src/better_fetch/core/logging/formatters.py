"""
Log formatters: JSON for machines, text for humans.

Both append the structured extra fields passed to FetchLogger.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Tuple

# Стандартные атрибуты LogRecord, которые не считаются extra-полями
_RESERVED = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def extra_fields(record: logging.LogRecord) -> Iterator[Tuple[str, Any]]:
    """Yield the non-standard attributes of a record."""
    for key, value in record.__dict__.items():
        if key not in _RESERVED and not key.startswith('_'):
            yield key, value


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Example output:
        {"timestamp": "2024-01-15T10:30:45.123000+00:00", "level": "DEBUG",
         "logger": "better_fetch", "message": "Request started",
         "method": "GET", "url": "https://api.com", "attempt": 0}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(extra_fields(record))

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """
    Format: [timestamp] [level] [logger] message key=value ...

    Example output:
        [2024-01-15 10:30:45] [DEBUG] [better_fetch] Request started method=GET url=https://api.com
    """

    def __init__(self):
        super().__init__(
            fmt='[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        base_msg = super().format(record)
        fields = [f"{key}={value}" for key, value in extra_fields(record)]
        if fields:
            base_msg += " " + " ".join(fields)
        return base_msg


def get_formatter(format_type: str) -> logging.Formatter:
    """
    Get formatter by name.

    Raises:
        ValueError: If format_type is unknown
    """
    formatters = {
        "json": JSONFormatter,
        "text": TextFormatter,
    }

    formatter_class = formatters.get(format_type.lower())
    if not formatter_class:
        raise ValueError(
            f"Unknown format type: {format_type}. "
            f"Available: {', '.join(formatters.keys())}"
        )

    return formatter_class()
