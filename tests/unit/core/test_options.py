"""
Tests for FetchOptions construction and merging.
"""

from types import MappingProxyType

import httpx
import pytest

from better_fetch.core.exceptions import ConfigurationError
from better_fetch.core.logging import FetchLogger, LoggingConfig
from better_fetch.core.options import FetchOptions, merge_headers, resolve_options


class TestMergeHeaders:

    def test_override_wins_case_insensitive(self):
        merged = merge_headers({"Accept": "text/html", "X-A": "1"}, {"accept": "application/json"})
        assert merged["accept"] == "application/json"
        assert merged["x-a"] == "1"

    def test_both_none(self):
        assert merge_headers(None, None) is None

    def test_returns_httpx_headers(self):
        assert isinstance(merge_headers({"a": "1"}, None), httpx.Headers)

    def test_list_of_tuples(self):
        merged = merge_headers([("X-A", "1")], [("X-B", "2")])
        assert dict(merged) == {"x-a": "1", "x-b": "2"}


class TestFetchOptions:

    def test_defaults(self):
        options = FetchOptions()
        assert options.retry == 0
        assert options.throw is False
        assert options.plugins == ()
        assert options.method is None

    def test_frozen(self):
        options = FetchOptions()
        with pytest.raises(AttributeError):
            options.retry = 3

    def test_plugins_list_frozen_to_tuple(self):
        plugin = lambda url, options: (url, options)
        options = FetchOptions(plugins=[plugin])
        assert options.plugins == (plugin,)

    def test_transport_options_read_only(self):
        options = FetchOptions(transport_options={"follow_redirects": True})
        assert isinstance(options.transport_options, MappingProxyType)

    def test_retry_none_becomes_zero(self):
        assert FetchOptions(retry=None).retry == 0


class TestCreate:

    def test_create_basic(self):
        options = FetchOptions.create(base_url="https://api.example.com", timeout=5, retry=2)
        assert options.base_url == "https://api.example.com"
        assert options.timeout == 5
        assert options.retry == 2
        assert options.logger is None

    def test_invalid_timeout(self):
        with pytest.raises(ConfigurationError, match="timeout"):
            FetchOptions.create(timeout=0)

    def test_invalid_retry(self):
        with pytest.raises(ConfigurationError, match="retry"):
            FetchOptions.create(retry=-1)

    def test_unknown_option(self):
        with pytest.raises(ConfigurationError, match="Unknown options: bogus"):
            FetchOptions.create(bogus=1)

    def test_logger_named_after_domain(self):
        options = FetchOptions.create(
            base_url="https://api.example.com",
            logging=LoggingConfig.create(enable_console=False),
        )
        assert isinstance(options.logger, FetchLogger)
        assert options.logger.name == "better_fetch.api.example.com"
        options.logger.close()


class TestMerge:

    def test_merge_dict(self):
        base = FetchOptions(base_url="https://a.com", retry=1)
        merged = base.merge({"retry": 3, "throw": True})
        assert merged.base_url == "https://a.com"
        assert merged.retry == 3
        assert merged.throw is True
        assert base.retry == 1

    def test_merge_dict_unknown_key(self):
        with pytest.raises(ConfigurationError):
            FetchOptions().merge({"nope": 1})

    def test_merge_options_only_explicit_fields(self):
        base = FetchOptions(base_url="https://a.com", retry=2)
        merged = base.merge(FetchOptions(throw=True))
        assert merged.base_url == "https://a.com"
        assert merged.retry == 2
        assert merged.throw is True

    def test_merge_options_defaults_win_when_explicit(self):
        base = FetchOptions(base_url="https://a.com", retry=2, throw=True, timeout=5, method="POST")
        merged = base.merge(FetchOptions(retry=0, throw=False, timeout=None, method=None))
        assert merged.base_url == "https://a.com"
        assert merged.retry == 0
        assert merged.throw is False
        assert merged.timeout is None
        assert merged.method is None

    def test_explicit_fields_tracked(self):
        assert FetchOptions().explicit_fields == frozenset()
        assert FetchOptions(retry=0).explicit_fields == {"retry"}
        assert FetchOptions.create(timeout=3).explicit_fields == {"timeout"}

    def test_replace_keeps_explicit_fields(self):
        options = FetchOptions(retry=0).with_headers({"X-A": "1"}).replace(throw=False)
        assert options.explicit_fields == {"retry", "headers", "throw"}

        merged = FetchOptions(base_url="https://a.com", retry=3, throw=True).merge(options)
        assert merged.base_url == "https://a.com"
        assert merged.retry == 0
        assert merged.throw is False

    def test_merge_headers_combined(self):
        base = FetchOptions(headers={"X-Env": "prod", "Accept": "text/html"})
        merged = base.merge({"headers": {"accept": "application/json"}})
        assert merged.headers["x-env"] == "prod"
        assert merged.headers["accept"] == "application/json"

    def test_merge_none(self):
        options = FetchOptions(retry=1)
        assert options.merge(None) is options

    def test_with_helpers(self):
        options = FetchOptions().with_headers({"X-A": "1"}).with_retry(2).with_timeout(3)
        assert options.headers["x-a"] == "1"
        assert options.retry == 2
        assert options.timeout == 3


class TestResolveOptions:

    def test_none(self):
        assert resolve_options() == FetchOptions()

    def test_overrides_win(self):
        options = resolve_options(FetchOptions(retry=1), retry=4, body={"a": 1})
        assert options.retry == 4
        assert options.body == {"a": 1}

    def test_dict_input(self):
        assert resolve_options({"throw": True}).throw is True
