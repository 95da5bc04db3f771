"""
Tests for the better-fetch exception hierarchy and result envelope.
"""

import pytest

from better_fetch.core.exceptions import (
    AbortError,
    BetterFetchException,
    ConfigurationError,
    ConnectionError,
    FetchError,
    InvalidURLError,
    PluginError,
    RequestTimeoutError,
    TimeoutError,
    TransportError,
    UnknownRouteError,
)
from better_fetch.core.result import FetchResult


class TestHierarchy:

    @pytest.mark.parametrize("exc_class", [
        TransportError, FetchError, InvalidURLError, PluginError, UnknownRouteError, ConfigurationError,
    ])
    def test_all_inherit_base(self, exc_class):
        assert issubclass(exc_class, BetterFetchException)

    def test_transport_family(self):
        assert issubclass(ConnectionError, TransportError)
        assert issubclass(TimeoutError, TransportError)
        assert issubclass(AbortError, TransportError)
        assert issubclass(RequestTimeoutError, AbortError)

    def test_fetch_error_is_not_transport_error(self):
        assert not issubclass(FetchError, TransportError)


class TestMessages:

    def test_transport_error_url(self):
        error = TransportError("Connection refused", "https://example.com")
        assert str(error) == "Connection refused (url: https://example.com)"
        assert error.url == "https://example.com"

    def test_timeout_type(self):
        error = TimeoutError("Read timeout", timeout_type="read")
        assert error.timeout_type == "read"
        assert "(read timeout)" in str(error)

    def test_abort_defaults(self):
        error = AbortError()
        assert error.message == "The operation was aborted"
        assert error.reason is None

    def test_request_timeout(self):
        error = RequestTimeoutError(2.5, "https://example.com")
        assert error.timeout == 2.5
        assert error.reason == "timeout"
        assert "2.5s" in str(error)

    def test_fetch_error(self):
        error = FetchError(404, "Not Found", {"message": "no such user"})
        assert error.status == 404
        assert error.error == {"message": "no such user"}
        assert str(error) == "HTTP 404 Not Found: no such user"

    def test_fetch_error_without_body(self):
        assert str(FetchError(500, "Internal Server Error")) == "HTTP 500 Internal Server Error"

    def test_invalid_url(self):
        assert InvalidURLError("/x").url == "/x"

    def test_plugin_error(self):
        error = PluginError("plugin", 42)
        assert error.result == 42
        assert "int" in str(error)

    def test_unknown_route(self):
        assert "/missing" in str(UnknownRouteError("/missing"))


class TestFetchResult:

    def test_success_unpacks(self):
        data, error = FetchResult.success({"a": 1})
        assert data == {"a": 1}
        assert error is None

    def test_failure_merges_status(self):
        result = FetchResult.failure(400, "Bad Request", {"message": "bad"})
        assert result.ok is False
        assert result.data is None
        assert result.error == {"message": "bad", "status": 400, "status_text": "Bad Request"}

    def test_failure_status_wins_over_body(self):
        result = FetchResult.failure(400, "Bad Request", {"status": "weird"})
        assert result.error["status"] == 400
