"""
Pytest configuration and fixtures for better-fetch tests.
"""

import json
import logging
from typing import Any, List, Optional, Tuple

import pytest
import responses as responses_lib

from better_fetch.core.logging.config import LoggingConfig
from better_fetch.core.logging.filters import clear_correlation_id
from better_fetch.core.options import FetchOptions
from better_fetch.core.response import FetchResponse


def json_response(status: int = 200, data: Any = None, status_text: str = "OK", **kwargs) -> FetchResponse:
    """FetchResponse with a JSON body."""
    content = b"" if data is None else json.dumps(data).encode("utf-8")
    return FetchResponse(status, status_text, {"content-type": "application/json"}, content, **kwargs)


def text_response(status: int = 200, text: str = "", content_type: str = "text/plain",
                  status_text: str = "OK", **kwargs) -> FetchResponse:
    return FetchResponse(status, status_text, {"content-type": content_type}, text.encode("utf-8"), **kwargs)


class FakeTransport:
    """
    In-memory transport that records every call.

    Responses are returned in order; the last one repeats. A response may be
    an exception (raised) or a callable (awaited with url and options).
    """

    def __init__(self, *responses: Any):
        self.responses = list(responses) or [json_response(200, {})]
        self.calls: List[Tuple[str, FetchOptions]] = []

    async def __call__(self, url: str, options: FetchOptions) -> FetchResponse:
        self.calls.append((url, options))
        index = min(len(self.calls) - 1, len(self.responses) - 1)
        response = self.responses[index]
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return await response(url, options)
        return response

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_options(self) -> Optional[FetchOptions]:
        return self.calls[-1][1] if self.calls else None


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def transport():
    """Fake transport answering 200 {}."""
    return FakeTransport()


@pytest.fixture
def mock_responses():
    """Mock HTTP responses using responses library."""
    with responses_lib.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def logging_config():
    """LoggingConfig with console output at DEBUG."""
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=True,
        enable_file=False
    )


@pytest.fixture
def logging_config_with_file(tmp_path):
    """
    LoggingConfig fixture with file logging enabled.

    Uses temporary directory for log files to avoid cleanup issues.
    """
    log_file = tmp_path / "test.log"
    return LoggingConfig.create(
        level="DEBUG",
        enable_console=False,
        enable_file=True,
        file_path=str(log_file)
    )


@pytest.fixture(autouse=True)
def reset_correlation_id():
    """Correlation ID must not leak between tests."""
    yield
    clear_correlation_id()


@pytest.fixture(autouse=True)
def reset_logger_propagation():
    """FetchLogger disables propagation globally; restore it between tests."""
    manager = logging.Logger.manager
    saved = {
        name: logger.propagate
        for name, logger in list(manager.loggerDict.items())
        if isinstance(logger, logging.Logger) and name.startswith("better_fetch")
    }
    yield
    for name, logger in list(manager.loggerDict.items()):
        if isinstance(logger, logging.Logger) and name.startswith("better_fetch"):
            logger.propagate = saved.get(name, True)
