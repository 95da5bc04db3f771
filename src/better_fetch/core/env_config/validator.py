"""
Pydantic models for external configuration (environment and config files).
"""

from typing import Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..logging import LoggingConfig


class LoggingSettings(BaseModel):
    """Logging section of a config file."""

    model_config = ConfigDict(extra='forbid')

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "text"] = "text"
    enable_console: bool = True
    enable_file: bool = False
    file_path: Optional[str] = None
    max_bytes: int = Field(default=10 * 1024 * 1024, gt=0)
    backup_count: int = Field(default=5, ge=0)
    enable_correlation_id: bool = True

    @model_validator(mode='after')
    def validate_file_path(self) -> 'LoggingSettings':
        """file_path is required when enable_file=True."""
        if self.enable_file and not self.file_path:
            raise ValueError("file_path is required when enable_file=True")
        return self

    def to_logging_config(self) -> LoggingConfig:
        return LoggingConfig.create(**self.model_dump())


class FileSettings(BaseModel):
    """
    Schema of a YAML/JSON config file.

    Example (YAML):
        better_fetch:
          base_url: https://api.example.com
          timeout: 10
          retry: 2
          headers:
            X-Client: my-app
          logging:
            level: DEBUG
            format: json
    """

    model_config = ConfigDict(extra='forbid')

    base_url: Optional[str] = None
    timeout: Optional[float] = Field(default=None, gt=0)
    retry: int = Field(default=0, ge=0)
    throw: bool = False
    method: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    query: Dict[str, str] = Field(default_factory=dict)
    logging: Optional[LoggingSettings] = None


class FetchSettings(BaseSettings):
    """
    better-fetch configuration from environment variables.

    Reads from:
    1. Environment variables (BETTER_FETCH_*)
    2. .env file
    3. Defaults

    Example .env file:
        BETTER_FETCH_BASE_URL=https://api.example.com
        BETTER_FETCH_TIMEOUT=10
        BETTER_FETCH_RETRY=2
        BETTER_FETCH_LOG_ENABLED=true
        BETTER_FETCH_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix='BETTER_FETCH_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    base_url: Optional[str] = Field(default=None, description="URL prefix for all requests")
    timeout: Optional[float] = Field(default=None, gt=0, description="Per-attempt timeout in seconds")
    retry: int = Field(default=0, ge=0, le=10)
    throw: bool = False

    # Logging
    log_enabled: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file_path: Optional[str] = None

    def to_logging_config(self) -> Optional[LoggingConfig]:
        """LoggingConfig if logging is enabled, else None."""
        if not self.log_enabled:
            return None
        return LoggingConfig.create(
            level=self.log_level,
            format=self.log_format,
            enable_file=self.log_file_path is not None,
            file_path=self.log_file_path,
        )
