"""
Configuration file loader for YAML and JSON files.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import ConfigurationError
from ..options import FetchOptions
from .validator import FileSettings

CONFIG_FILE_ENV = "BETTER_FETCH_CONFIG_FILE"


class ConfigFileLoader:
    """
    Загрузчик базовых FetchOptions из файлов.

    Поддерживает YAML и JSON; формат определяется по расширению.
    Настройки могут лежать в корне файла или в секции ``better_fetch``.

    Examples:
        >>> options = ConfigFileLoader.from_yaml("fetch.yaml")
        >>> options = ConfigFileLoader.from_file("fetch.json")
        >>> options = ConfigFileLoader.from_env_path()  # из BETTER_FETCH_CONFIG_FILE
    """

    @staticmethod
    def from_yaml(path: Union[str, Path]) -> FetchOptions:
        """
        Загрузить конфиг из YAML файла.

        Raises:
            FileNotFoundError: Если файл не найден
            ConfigurationError: Если конфиг невалидный
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {path}: {e}") from e

        return ConfigFileLoader._build_options(data, str(path))

    @staticmethod
    def from_json(path: Union[str, Path]) -> FetchOptions:
        """
        Загрузить конфиг из JSON файла.

        Raises:
            FileNotFoundError: Если файл не найден
            ConfigurationError: Если конфиг невалидный
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON syntax in {path}: {e}") from e

        return ConfigFileLoader._build_options(data, str(path))

    @staticmethod
    def from_file(path: Union[str, Path]) -> FetchOptions:
        """Автоопределение формата по расширению (.yaml, .yml, .json)."""
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            return ConfigFileLoader.from_yaml(path)
        elif suffix == ".json":
            return ConfigFileLoader.from_json(path)
        else:
            raise ConfigurationError(
                f"Unsupported config file format: {suffix}. "
                f"Supported formats: .yaml, .yml, .json"
            )

    @staticmethod
    def from_env_path() -> Optional[FetchOptions]:
        """Загрузить из пути в BETTER_FETCH_CONFIG_FILE (None, если не задан)."""
        config_path = os.environ.get(CONFIG_FILE_ENV)
        if not config_path:
            return None

        return ConfigFileLoader.from_file(config_path)

    @staticmethod
    def _build_options(data: Any, source: str) -> FetchOptions:
        if not data:
            raise ConfigurationError(f"Empty config file: {source}")

        if isinstance(data, dict) and "better_fetch" in data:
            data = data["better_fetch"]

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config must be a dictionary, got {type(data).__name__} in {source}"
            )

        try:
            settings = FileSettings.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config in {source}: {e}") from e

        values: Dict[str, Any] = settings.model_dump(exclude={'logging', 'headers', 'query'})
        if settings.headers:
            values['headers'] = settings.headers
        if settings.query:
            values['query'] = settings.query
        if settings.logging is not None:
            values['logging'] = settings.logging.to_logging_config()
        return FetchOptions.create(**values)
