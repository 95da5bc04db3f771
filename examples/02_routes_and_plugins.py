"""
Typed routes, plugins and retries.
"""

import asyncio
import logging

from pydantic import BaseModel

from better_fetch import AuthPlugin, FetchOptions, LoggingPlugin, RouteSchema, create_fetch


class Todo(BaseModel):
    id: int
    title: str
    completed: bool


class NewPost(BaseModel):
    title: str
    body: str
    userId: int


def api_version_header(url, options):
    """Plugins are plain (url, options) -> (url, options) callables."""
    return url, options.with_headers({"X-Api-Version": "2024-01"})


async def main():
    logging.basicConfig(level=logging.INFO)

    fetch = create_fetch(
        FetchOptions(
            base_url="https://jsonplaceholder.typicode.com",
            retry=2,
            timeout=10,
            plugins=(AuthPlugin(token="demo-token"), api_version_header, LoggingPlugin()),
        ),
        routes={
            "/todos/1": RouteSchema(output=Todo),
            "/posts": RouteSchema(input=NewPost),
        },
        validate_input=True,
    )

    todo, error = await fetch("/todos/1")
    print(f"Todo: {todo!r}")

    created, error = await fetch.post("/posts", body={"title": "t", "body": "b", "userId": 1})
    print(f"Created: {created}")

    # on_retry fires once per scheduled retry
    data, error = await fetch(
        "/definitely-missing",
        on_retry=lambda ctx: print(f"retrying after {ctx.response.status}"),
    )
    print(f"Final error: {error}")


if __name__ == "__main__":
    asyncio.run(main())
