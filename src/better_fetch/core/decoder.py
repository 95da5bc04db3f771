"""
Response classification and decoding.
"""

import json
import re
from typing import Any, Dict, Optional

from .options import FetchOptions
from .pipeline import maybe_await
from .response import FetchResponse
from .validators import as_validator

JSON_RE = re.compile(r"^application/(?:[\w!#$%&*.^`~-]*\+)?json(;.+)?$", re.IGNORECASE)

TEXT_TYPES = frozenset({
    "image/svg",
    "image/svg+xml",
    "application/xml",
    "application/xhtml",
    "application/xhtml+xml",
    "application/html",
})
FORM_TYPES = frozenset({"multipart/form-data", "application/x-www-form-urlencoded"})
STREAM_TYPES = frozenset({"text/event-stream", "application/x-ndjson"})

# Тип ответа -> метод FetchResponse
DECODERS = {
    "blob": "blob",
    "array_buffer": "array_buffer",
    "form_data": "form_data",
    "stream": "stream",
}


def detect_response_type(response: FetchResponse) -> str:
    """
    Classify a response by its content-type.

    Returns:
        One of ``json``, ``text``, ``form_data``, ``stream``, ``array_buffer``, ``blob``.
        A missing content-type is treated as ``json``.
    """
    raw = response.headers.get("content-type")
    if not raw:
        return "json"
    content_type = raw.split(";")[0].strip().lower()
    if JSON_RE.match(content_type):
        return "json"
    if content_type in STREAM_TYPES:
        return "stream"
    if content_type in TEXT_TYPES or content_type.startswith("text/"):
        return "text"
    if content_type in FORM_TYPES:
        return "form_data"
    if content_type == "application/octet-stream":
        return "array_buffer"
    return "blob"


def json_parse(text: str) -> Any:
    """
    Default text parser. Never raises.

    Returns None for empty text, the decoded value for JSON, and the text
    itself when it is not JSON.
    """
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


def is_json_parsable(text: Any) -> bool:
    if not isinstance(text, str):
        return False
    try:
        json.loads(text)
    except ValueError:
        return False
    return True


async def decode_success(response: FetchResponse, options: FetchOptions) -> Any:
    """
    Decode an ok response that has a body.

    Parser and validator errors propagate: a success status with an unusable
    payload is not an expected failure mode.
    """
    response_type = detect_response_type(response)
    if response_type in ("json", "text"):
        parser = options.json_parser or json_parse
        text = await response.text()
        value = await maybe_await(parser(text))
        return as_validator(options.output_validator).parse(value)
    return await getattr(response, DECODERS[response_type])()


async def decode_error_body(response: FetchResponse, options: FetchOptions) -> Dict[str, Any]:
    """
    Best-effort parse of a failed response body.

    JSON object -> dict; other JSON value -> {"message": value};
    non-JSON text -> {"message": text}; empty -> {}.
    """
    text = await response.text()
    parsed: Optional[Any]
    if is_json_parsable(text):
        parser = options.json_parser or json_parse
        parsed = await maybe_await(parser(text))
    elif text:
        parsed = {"message": text}
    else:
        parsed = None

    if parsed is None:
        return {}
    if isinstance(parsed, dict):
        return dict(parsed)
    return {"message": parsed}
