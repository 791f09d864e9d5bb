"""
Configuration models for storefront-client.

Pydantic models provide validation and defaults; StorefrontSettings maps
environment variables onto them.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront.constants import (
    DEFAULT_API_URL,
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_FILE_SIZE_BYTES,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    MAX_TIMEOUT_SECONDS,
    MIN_LOG_FILE_SIZE_BYTES,
    RefreshDefaults,
)
from storefront.resilience.retry import RetryStrategy


class LogLevel(str, Enum):
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ApiConfig(BaseModel):
    """Where the API lives and how long a call may take."""

    base_url: str = Field(DEFAULT_API_URL, description="API base URL")
    timeout: float = Field(
        DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        le=MAX_TIMEOUT_SECONDS,
        description="Per-request deadline in seconds",
    )
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")


class RefreshConfig(BaseModel):
    """Backoff for transport failures while refreshing the access token."""

    max_attempts: int = Field(RefreshDefaults.MAX_ATTEMPTS, ge=1, le=10)
    base_delay: float = Field(RefreshDefaults.BASE_DELAY_SECONDS, ge=0, le=60)
    max_delay: float = Field(RefreshDefaults.MAX_DELAY_SECONDS, ge=0, le=300)
    strategy: RetryStrategy = Field(RetryStrategy.EXPONENTIAL_BACKOFF_JITTER)


class SessionConfig(BaseModel):
    """Persistence of the credential pair."""

    credentials_file: Optional[Path] = Field(
        None, description="Session file (defaults to <config dir>/session.json)"
    )
    encrypt_tokens: bool = Field(False, description="Encrypt tokens at rest")

    @field_validator("credentials_file")
    @classmethod
    def expand_credentials_file(cls, v: Optional[Path]) -> Optional[Path]:
        if v is None:
            return v
        return Path(v).expanduser()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.WARNING, description="Logging level")
    format: str = Field("console", description="Log format: console, json, rich")
    output: List[str] = Field(["console"], description="Log outputs: console, file")
    file_path: Optional[Path] = Field(None, description="Log file path")
    max_file_size: int = Field(
        DEFAULT_LOG_FILE_SIZE_BYTES,
        ge=MIN_LOG_FILE_SIZE_BYTES,
        description="Maximum log file size in bytes",
    )
    backup_count: int = Field(DEFAULT_LOG_BACKUP_COUNT, ge=1, le=20)

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ["console", "json", "rich"]:
            raise ValueError("format must be one of: console, json, rich")
        return v

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: List[str]) -> List[str]:
        valid_outputs = {"console", "file"}
        for output in v:
            if output not in valid_outputs:
                raise ValueError(
                    f"output must contain only: {', '.join(sorted(valid_outputs))}"
                )
        return v


class StorefrontConfig(BaseModel):
    """Main storefront-client configuration model."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    refresh: RefreshConfig = Field(default_factory=RefreshConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
        "str_strip_whitespace": True,
    }


class StorefrontSettings(BaseSettings):
    """Settings that can be overridden by environment variables."""

    api_url: Optional[str] = Field(None, alias="STOREFRONT_API_URL")
    api_timeout: Optional[float] = Field(None, alias="STOREFRONT_API_TIMEOUT")
    refresh_max_attempts: Optional[int] = Field(
        None, alias="STOREFRONT_REFRESH_MAX_ATTEMPTS"
    )
    credentials_file: Optional[str] = Field(None, alias="STOREFRONT_CREDENTIALS_FILE")
    encrypt_tokens: Optional[bool] = Field(None, alias="STOREFRONT_ENCRYPT_TOKENS")
    log_level: Optional[str] = Field(None, alias="STOREFRONT_LOG_LEVEL")
    log_format: Optional[str] = Field(None, alias="STOREFRONT_LOG_FORMAT")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )
