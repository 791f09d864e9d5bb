"""
Configuration management for storefront-client.

Usage:
    from storefront.core.config import ConfigManager

    config = ConfigManager().load_config()
    config.api.base_url
"""

from ...exceptions.config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
)
from .manager import ConfigManager, default_config_directory
from .models import (
    ApiConfig,
    LoggingConfig,
    LogLevel,
    RefreshConfig,
    SessionConfig,
    StorefrontConfig,
    StorefrontSettings,
)

__all__ = [
    "StorefrontConfig",
    "ApiConfig",
    "RefreshConfig",
    "SessionConfig",
    "LoggingConfig",
    "LogLevel",
    "ConfigManager",
    "StorefrontSettings",
    "default_config_directory",
    "ConfigurationError",
    "InvalidConfigurationError",
    "ConfigurationValidationError",
]
