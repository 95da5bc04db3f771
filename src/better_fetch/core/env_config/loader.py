"""
Configuration loader from environment variables and .env files.
"""

from typing import Any, Optional

from pydantic import ValidationError

from ..exceptions import ConfigurationError
from ..options import FetchOptions
from .validator import FetchSettings


def load_from_env(env_file: Optional[str] = None, **overrides: Any) -> FetchOptions:
    """
    Load base FetchOptions from environment variables.

    Priority (highest to lowest):
    1. **overrides - explicit FetchOptions fields
    2. Environment variables (BETTER_FETCH_*)
    3. .env file
    4. Defaults

    Args:
        env_file: Custom .env file path
        **overrides: Explicit option overrides

    Returns:
        FetchOptions instance

    Raises:
        ConfigurationError: Environment values fail validation

    Example:
        >>> options = load_from_env(retry=1)
        >>> fetcher = create_fetch(options)
    """
    try:
        if env_file is not None:
            settings = FetchSettings(_env_file=env_file)
        else:
            settings = FetchSettings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid environment configuration: {e}") from e

    values = {
        'base_url': settings.base_url,
        'timeout': settings.timeout,
        'retry': settings.retry,
        'throw': settings.throw,
        'logging': settings.to_logging_config(),
    }
    values.update(overrides)
    return FetchOptions.create(**values)
