"""better-fetch - async fetch wrapper with plugins, retries and typed routes."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .core.abort import AbortController, AbortSignal
from .core.env_config import ConfigFileLoader, load_from_env
from .core.exceptions import (
    BetterFetchException,
    TransportError,
    ConnectionError,
    TimeoutError,
    AbortError,
    RequestTimeoutError,
    FetchError,
    InvalidURLError,
    PluginError,
    UnknownRouteError,
    ConfigurationError,
)
from .core.executor import better_fetch
from .core.logging import LoggingConfig
from .core.options import FetchOptions
from .core.response import FetchResponse
from .core.result import FetchResult
from .core.validators import as_validator
from .plugins import AuthPlugin, LoggingPlugin, Plugin, PluginResult
from .routes import Fetcher, RouteSchema, create_fetch
from .transports import HttpxFetch, RequestsFetch

# NullHandler prevents "No handler found" warnings;
# configure logging.getLogger('better_fetch') to see records
logging.getLogger('better_fetch').addHandler(logging.NullHandler())

try:
    __version__ = version("better-fetch")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__all__ = [
    "better_fetch",
    "create_fetch",
    "Fetcher",
    "RouteSchema",
    "FetchOptions",
    "FetchResult",
    "FetchResponse",
    "AbortController",
    "AbortSignal",
    "as_validator",
    # Plugins
    "Plugin",
    "PluginResult",
    "AuthPlugin",
    "LoggingPlugin",
    # Transports
    "HttpxFetch",
    "RequestsFetch",
    # Config
    "LoggingConfig",
    "load_from_env",
    "ConfigFileLoader",
    # Exceptions
    "BetterFetchException",
    "TransportError",
    "ConnectionError",
    "TimeoutError",
    "AbortError",
    "RequestTimeoutError",
    "FetchError",
    "InvalidURLError",
    "PluginError",
    "UnknownRouteError",
    "ConfigurationError",
]
