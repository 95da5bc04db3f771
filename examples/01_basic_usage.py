"""
Basic better-fetch Usage Examples

Demonstrates GET, POST and error handling with the (data, error) envelope.
"""

import asyncio

from better_fetch import FetchError, better_fetch

API = "https://jsonplaceholder.typicode.com"


async def basic_get_request():
    """Simple GET request."""
    print("\n=== Basic GET Request ===")

    data, error = await better_fetch("/posts/1", base_url=API)

    print(f"Error: {error}")
    print(f"Data: {data}")


async def post_with_json():
    """POST request with JSON body (serialized automatically)."""
    print("\n=== POST with JSON ===")

    data, error = await better_fetch(
        "/posts",
        base_url=API,
        body={"title": "My Post", "body": "This is the content", "userId": 1},
    )
    print(f"Created: {data}")


async def handle_not_found():
    """Non-ok responses come back as an error envelope."""
    print("\n=== 404 Envelope ===")

    data, error = await better_fetch("/posts/999999", base_url=API)
    print(f"Data: {data}")
    print(f"Status: {error['status']} {error['status_text']}")


async def throw_on_error():
    """throw=True raises FetchError instead."""
    print("\n=== throw=True ===")

    try:
        await better_fetch("/posts/999999", base_url=API, throw=True)
    except FetchError as e:
        print(f"Caught: {e}")


async def main():
    await basic_get_request()
    await post_with_json()
    await handle_not_found()
    await throw_on_error()


if __name__ == "__main__":
    asyncio.run(main())
