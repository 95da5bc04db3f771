"""
Tests for response classification and body decoding.
"""

import pytest

from better_fetch.core.decoder import (
    decode_error_body,
    decode_success,
    detect_response_type,
    is_json_parsable,
    json_parse,
)
from better_fetch.core.options import FetchOptions
from better_fetch.core.response import FetchResponse


def response(content_type, content=b"", status=200):
    headers = {"content-type": content_type} if content_type else {}
    return FetchResponse(status, "OK", headers, content)


class TestDetectResponseType:

    @pytest.mark.parametrize("content_type, expected", [
        (None, "json"),
        ("application/json", "json"),
        ("application/json; charset=utf-8", "json"),
        ("application/vnd.api+json", "json"),
        ("application/problem+json", "json"),
        ("text/plain", "text"),
        ("text/html; charset=utf-8", "text"),
        ("text/csv", "text"),
        ("image/svg+xml", "text"),
        ("application/xml", "text"),
        ("application/xhtml+xml", "text"),
        ("text/event-stream", "stream"),
        ("application/x-ndjson", "stream"),
        ("multipart/form-data; boundary=x", "form_data"),
        ("application/x-www-form-urlencoded", "form_data"),
        ("application/octet-stream", "array_buffer"),
        ("image/png", "blob"),
        ("application/pdf", "blob"),
    ])
    def test_classification(self, content_type, expected):
        assert detect_response_type(response(content_type)) == expected

    def test_case_insensitive(self):
        assert detect_response_type(response("Application/JSON")) == "json"


class TestJsonParse:

    def test_object(self):
        assert json_parse('{"a": 1}') == {"a": 1}

    def test_empty(self):
        assert json_parse("") is None

    def test_not_json_returns_text(self):
        assert json_parse("hello") == "hello"

    def test_scalars(self):
        assert json_parse("42") == 42
        assert json_parse("null") is None

    def test_is_json_parsable(self):
        assert is_json_parsable('{"a": 1}') is True
        assert is_json_parsable("[]") is True
        assert is_json_parsable("hello") is False
        assert is_json_parsable("") is False
        assert is_json_parsable(None) is False


class TestDecodeSuccess:

    @pytest.mark.asyncio
    async def test_json(self):
        data = await decode_success(response("application/json", b'[1, 2]'), FetchOptions())
        assert data == [1, 2]

    @pytest.mark.asyncio
    async def test_text_runs_parser(self):
        data = await decode_success(response("text/plain", b'{"a": 1}'), FetchOptions())
        assert data == {"a": 1}

    @pytest.mark.asyncio
    async def test_custom_parser(self):
        options = FetchOptions(json_parser=lambda text: text.upper())
        data = await decode_success(response("text/plain", b"abc"), options)
        assert data == "ABC"

    @pytest.mark.asyncio
    async def test_validator_applied(self):
        class Doubler:
            def parse(self, value):
                return value * 2

        options = FetchOptions(output_validator=Doubler())
        assert await decode_success(response("application/json", b"21"), options) == 42

    @pytest.mark.asyncio
    async def test_form_data(self):
        data = await decode_success(
            response("application/x-www-form-urlencoded", b"a=1&b=two"), FetchOptions()
        )
        assert data == [("a", "1"), ("b", "two")]

    @pytest.mark.asyncio
    async def test_stream(self):
        stream = await decode_success(response("text/event-stream", b"data: 1\n\n"), FetchOptions())
        chunks = [chunk async for chunk in stream]
        assert b"".join(chunks) == b"data: 1\n\n"

    @pytest.mark.asyncio
    async def test_blob(self):
        assert await decode_success(response("image/gif", b"GIF89a"), FetchOptions()) == b"GIF89a"


class TestDecodeErrorBody:

    @pytest.mark.asyncio
    async def test_json_object(self):
        body = await decode_error_body(response("application/json", b'{"message": "x"}', 400), FetchOptions())
        assert body == {"message": "x"}

    @pytest.mark.asyncio
    async def test_plain_text(self):
        body = await decode_error_body(response("text/html", b"<h1>oops</h1>", 500), FetchOptions())
        assert body == {"message": "<h1>oops</h1>"}

    @pytest.mark.asyncio
    async def test_empty(self):
        assert await decode_error_body(response(None, b"", 500), FetchOptions()) == {}

    @pytest.mark.asyncio
    async def test_json_scalar(self):
        body = await decode_error_body(response("application/json", b'"denied"', 403), FetchOptions())
        assert body == {"message": "denied"}

    @pytest.mark.asyncio
    async def test_json_null(self):
        assert await decode_error_body(response("application/json", b"null", 500), FetchOptions()) == {}
