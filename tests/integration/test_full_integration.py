"""
End-to-end scenarios: create_fetch, plugins, routes, retries over a mocked network.
"""

import json

import httpx
import pytest
import respx
from pydantic import BaseModel

from better_fetch import (
    AuthPlugin,
    FetchError,
    FetchOptions,
    LoggingConfig,
    RequestTimeoutError,
    RouteSchema,
    create_fetch,
)

API = "https://api.integration.test"


class Token(BaseModel):
    token: str


class User(BaseModel):
    id: int
    name: str


@pytest.fixture
def fetch():
    return create_fetch(
        FetchOptions(base_url=API, retry=1, headers={"X-Client": "tests"}),
        routes={
            "/signin": RouteSchema(output=Token),
            "/users/1": RouteSchema(output=User),
        },
    )


@pytest.mark.integration
class TestFullIntegration:

    @respx.mock
    @pytest.mark.asyncio
    async def test_signin_then_profile(self, fetch):
        respx.post(f"{API}/signin").mock(return_value=httpx.Response(200, json={"token": "jwt-1"}))
        profile = respx.get(f"{API}/users/1").mock(return_value=httpx.Response(200, json={"id": 1, "name": "Ann"}))

        token, error = await fetch.post("/signin", body={"username": "ann", "password": "pw"})
        assert error is None
        assert token == Token(token="jwt-1")

        user, error = await fetch("/users/1", plugins=[AuthPlugin(token=token.token)])

        assert user == User(id=1, name="Ann")
        sent = profile.calls.last.request
        assert sent.headers["authorization"] == "Bearer jwt-1"
        assert sent.headers["x-client"] == "tests"

    @respx.mock
    @pytest.mark.asyncio
    async def test_retry_then_error_envelope(self, fetch):
        route = respx.get(f"{API}/reports").mock(
            return_value=httpx.Response(500, json={"message": "database down"})
        )

        data, error = await fetch("/reports")

        assert route.call_count == 2
        assert data is None
        assert error == {"message": "database down", "status": 500, "status_text": "Internal Server Error"}

    @respx.mock
    @pytest.mark.asyncio
    async def test_throw_mode(self, fetch):
        respx.delete(f"{API}/users/1").mock(return_value=httpx.Response(403, text="forbidden"))

        with pytest.raises(FetchError) as exc_info:
            await fetch.delete("/users/1", throw=True, retry=0)

        assert exc_info.value.status == 403
        assert exc_info.value.error == {"message": "forbidden"}

    @pytest.mark.asyncio
    async def test_timeout_with_slow_transport(self):
        import asyncio

        async def slow(url, options):
            await asyncio.sleep(1)

        fetch = create_fetch({"base_url": API, "timeout": 0.05, "fetch": slow})

        with pytest.raises(RequestTimeoutError):
            await fetch("/slow")

    @respx.mock
    @pytest.mark.asyncio
    async def test_structured_logging(self, tmp_path):
        log_file = tmp_path / "fetch.log"
        options = FetchOptions.create(
            base_url=API,
            retry=1,
            logging=LoggingConfig.create(
                level="DEBUG",
                format="json",
                enable_console=False,
                enable_file=True,
                file_path=str(log_file),
            ),
        )
        respx.get(f"{API}/flaky").mock(side_effect=[httpx.Response(502), httpx.Response(200, json={})])

        await create_fetch(options)("/flaky")
        options.logger.close()

        records = [json.loads(line) for line in log_file.read_text().splitlines()]
        messages = [r["message"] for r in records]
        assert messages.count("Request started") == 2
        assert "Retrying request" in messages
        assert all("timestamp" in r for r in records)
