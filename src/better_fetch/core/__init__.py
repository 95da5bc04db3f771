"""Core better-fetch модули."""

from .abort import AbortController, AbortSignal, race_abort
from .capabilities import Capabilities, resolve_capabilities
from .context import RequestContext, ResponseContext
from .decoder import detect_response_type, is_json_parsable, json_parse
from .exceptions import (
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
from .executor import better_fetch
from .normalizer import build_url, normalize_request
from .options import FetchOptions, merge_headers, resolve_options
from .pipeline import apply_plugins
from .response import FetchResponse, to_fetch_response
from .result import FetchResult
from .validators import PassthroughValidator, PydanticValidator, Validator, as_validator

__all__ = [
    # Lifecycle
    "better_fetch",
    "FetchOptions",
    "FetchResult",
    "FetchResponse",
    "merge_headers",
    "resolve_options",
    "to_fetch_response",
    # Stages
    "apply_plugins",
    "build_url",
    "normalize_request",
    "detect_response_type",
    "json_parse",
    "is_json_parsable",
    # Capabilities
    "AbortController",
    "AbortSignal",
    "race_abort",
    "Capabilities",
    "resolve_capabilities",
    "RequestContext",
    "ResponseContext",
    # Validators
    "Validator",
    "PassthroughValidator",
    "PydanticValidator",
    "as_validator",
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
