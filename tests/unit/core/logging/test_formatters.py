"""
Tests for JSON and text log formatters.
"""

import json
import logging

import pytest

from better_fetch.core.logging.formatters import (
    JSONFormatter,
    TextFormatter,
    extra_fields,
    get_formatter,
)


def make_record(**extra):
    record = logging.LogRecord("better_fetch", logging.DEBUG, __file__, 10, "Request %s", ("started",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestExtraFields:

    def test_only_custom_attributes(self):
        record = make_record(method="GET", _private=1)
        assert dict(extra_fields(record)) == {"method": "GET"}


class TestJSONFormatter:

    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "DEBUG"
        assert data["logger"] == "better_fetch"
        assert data["message"] == "Request started"
        assert "timestamp" in data

    def test_extra_fields_included(self):
        data = json.loads(JSONFormatter().format(make_record(method="GET", attempt=0)))

        assert data["method"] == "GET"
        assert data["attempt"] == 0

    def test_non_serializable_values(self):
        data = json.loads(JSONFormatter().format(make_record(obj=object())))
        assert data["obj"].startswith("<object")

    def test_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            import sys
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

        data = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in data["exception"]


class TestTextFormatter:

    def test_format(self):
        output = TextFormatter().format(make_record(method="GET"))

        assert "[DEBUG]" in output
        assert "[better_fetch]" in output
        assert "Request started" in output
        assert output.endswith("method=GET")


class TestGetFormatter:

    def test_known(self):
        assert isinstance(get_formatter("json"), JSONFormatter)
        assert isinstance(get_formatter("TEXT"), TextFormatter)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown format type"):
            get_formatter("xml")
