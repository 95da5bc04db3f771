"""
External configuration: environment variables, .env files, YAML/JSON files.

Example:
    >>> from better_fetch.core.env_config import load_from_env, ConfigFileLoader
    >>>
    >>> options = load_from_env()                       # BETTER_FETCH_* variables
    >>> options = ConfigFileLoader.from_file("fetch.yaml")
"""

from .file_loader import ConfigFileLoader
from .loader import load_from_env
from .validator import FetchSettings, FileSettings, LoggingSettings

__all__ = [
    "load_from_env",
    "ConfigFileLoader",
    "FetchSettings",
    "FileSettings",
    "LoggingSettings",
]
