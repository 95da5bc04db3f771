"""
Configuration from environment variables and config files.

Environment (.env):
    BETTER_FETCH_BASE_URL=https://jsonplaceholder.typicode.com
    BETTER_FETCH_RETRY=1
    BETTER_FETCH_LOG_ENABLED=true
    BETTER_FETCH_LOG_FORMAT=json

Config file (fetch.yaml):
    better_fetch:
      base_url: https://jsonplaceholder.typicode.com
      timeout: 5
      logging:
        level: DEBUG
        format: text
"""

import asyncio
import os

from better_fetch import ConfigFileLoader, create_fetch, load_from_env


async def main():
    os.environ.setdefault("BETTER_FETCH_BASE_URL", "https://jsonplaceholder.typicode.com")
    os.environ.setdefault("BETTER_FETCH_LOG_ENABLED", "true")
    os.environ.setdefault("BETTER_FETCH_LOG_LEVEL", "DEBUG")

    options = load_from_env(retry=1)
    fetch = create_fetch(options)

    data, error = await fetch("/users/1")
    print(f"User: {data}")

    # Файл конфигурации из BETTER_FETCH_CONFIG_FILE, если задан
    file_options = ConfigFileLoader.from_env_path()
    if file_options is not None:
        data, error = await create_fetch(file_options)("/users/2")
        print(f"User from file config: {data}")

    if options.logger:
        options.logger.close()


if __name__ == "__main__":
    asyncio.run(main())
