"""
Request normalization: URL assembly, body encoding, header defaulting.

Pure given its inputs; the header set it builds is the one structure that
is mutated in place.
"""

import io
import json
from typing import Any, Mapping, Optional, Tuple

import httpx
from pydantic import BaseModel

from .abort import AbortSignal
from .capabilities import Capabilities
from .exceptions import InvalidURLError
from .options import FetchOptions

JSON_CONTENT_TYPE = "application/json"


def is_json_serializable(value: Any) -> bool:
    """
    Can ``value`` be auto-serialized to JSON text?

    Strings, bytes, files and iterators are passed through to the transport
    as-is, so they are not considered serializable here.
    """
    if value is None:
        return False
    if isinstance(value, (str, bytes, bytearray, memoryview)):
        return False
    if isinstance(value, (bool, int, float, dict, list, tuple)):
        return True
    if isinstance(value, BaseModel):
        return True
    return False


def is_stream_body(value: Any) -> bool:
    """Files, generators and (async) iterators that are not plain containers."""
    if value is None or isinstance(value, (str, bytes, bytearray, memoryview, dict, list, tuple)):
        return False
    if isinstance(value, io.IOBase) or hasattr(value, "read"):
        return True
    return hasattr(value, "__aiter__") or hasattr(value, "__next__")


def encode_json_body(value: Any) -> str:
    if isinstance(value, BaseModel):
        return value.model_dump_json()
    return json.dumps(value)


def coerce_query_value(value: Any) -> str:
    """String coercion for query values (JSON spelling for bool/None)."""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    return str(value)


def build_url(base_url: Optional[str], url: str, query: Optional[Mapping[str, Any]]) -> str:
    """
    Concatenate base_url and url, then append query parameters.

    Example:
        >>> build_url("https://api.example.com", "/search?q=1", {"a": 1, "b": "x"})
        'https://api.example.com/search?q=1&a=1&b=x'
    """
    full = f"{base_url or ''}{url}"
    try:
        parsed = httpx.URL(full)
    except httpx.InvalidURL as e:
        raise InvalidURLError(full) from e
    if not parsed.is_absolute_url or not parsed.host:
        raise InvalidURLError(full)

    if query:
        params = parsed.params
        for key, value in query.items():
            params = params.add(str(key), coerce_query_value(value))
        parsed = parsed.copy_with(params=params)
    return str(parsed)


def resolve_method(method: Optional[str], body: Any) -> str:
    if method:
        return method
    return "POST" if body is not None else "GET"


def normalize_request(
    url: str,
    options: FetchOptions,
    capabilities: Capabilities,
    signal: Optional[AbortSignal] = None,
) -> Tuple[str, FetchOptions]:
    """
    Build the final URL and request options for one attempt.

    Args:
        url: Post-plugin URL
        options: Post-plugin options
        capabilities: Resolved constructors (headers_class is used here)
        signal: Signal of this attempt's controller; ignored if options.signal is set

    Returns:
        (final_url, finalized_options)

    Raises:
        InvalidURLError: base_url + url is not an absolute URL
    """
    final_url = build_url(options.base_url, url, None)
    headers = capabilities.headers_class(options.headers or {})

    body = options.body
    content_type = headers.get("content-type")
    should_stringify = (
        is_json_serializable(body)
        and (content_type is None or content_type == JSON_CONTENT_TYPE)
    )
    if should_stringify:
        if "content-type" not in headers:
            headers["content-type"] = JSON_CONTENT_TYPE
        if "accept" not in headers:
            headers["accept"] = JSON_CONTENT_TYPE
        body = encode_json_body(body)

    if options.query:
        final_url = build_url(None, final_url, options.query)

    duplex = options.duplex
    if duplex is None and is_stream_body(options.body):
        duplex = "half"

    finalized = options.replace(
        headers=headers,
        body=body,
        method=resolve_method(options.method, options.body),
        duplex=duplex,
        signal=options.signal or signal,
    )
    return final_url, finalized
