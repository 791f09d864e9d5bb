"""
Configuration manager for storefront-client.

Loads the TOML config file, applies environment overrides and validates the
result into a StorefrontConfig.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w
from pydantic import ValidationError

from storefront.constants import CONFIG_DIR_NAME, CONFIG_FILE_NAME, SESSION_FILE_NAME
from storefront.exceptions.config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
)

from .models import StorefrontConfig, StorefrontSettings


def default_config_directory() -> Path:
    """Per-user configuration directory."""
    return Path.home() / ".config" / CONFIG_DIR_NAME


class ConfigManager:
    """Load, validate and persist storefront-client configuration."""

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_file: Path to custom config file. If None, uses default location.
        """
        if config_file:
            self.config_file = Path(config_file)
        else:
            self.config_file = default_config_directory() / CONFIG_FILE_NAME

        self._config: Optional[StorefrontConfig] = None

    @property
    def config_directory(self) -> Path:
        return self.config_file.parent

    @property
    def credentials_file(self) -> Path:
        """Session file path, from configuration or next to the config file."""
        config = self.load_config()
        return config.session.credentials_file or self.config_directory / SESSION_FILE_NAME

    def load_config(self) -> StorefrontConfig:
        """Load and validate configuration from file and environment."""
        if self._config is not None:
            return self._config

        config_data = self._apply_env_overrides(self._read_file_data())
        self._config = self._validate(config_data)
        return self._config

    def _read_file_data(self) -> Dict[str, Any]:
        """Raw TOML data, without environment overrides."""
        if not self.config_file.exists():
            return {}
        return self._load_toml_file()

    def _load_toml_file(self) -> Dict[str, Any]:
        try:
            with open(self.config_file, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise InvalidConfigurationError(
                str(self.config_file), f"Invalid TOML syntax: {e}", "valid TOML format"
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read configuration file {self.config_file}: {e}",
                help_text="Check file permissions and path",
            ) from e

    @staticmethod
    def _validate(config_data: Dict[str, Any], key: Optional[str] = None) -> StorefrontConfig:
        try:
            return StorefrontConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationValidationError(
                [f"{key or '.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                 for err in e.errors()]
            ) from e

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to configuration."""
        try:
            settings = StorefrontSettings()
        except ValidationError as e:
            raise ConfigurationValidationError(
                [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            ) from e

        config_data = {section: dict(values) if isinstance(values, dict) else values
                       for section, values in config_data.items()}
        for section in ("api", "refresh", "session", "logging"):
            config_data.setdefault(section, {})

        if settings.api_url:
            config_data["api"]["base_url"] = settings.api_url
        if settings.api_timeout is not None:
            config_data["api"]["timeout"] = settings.api_timeout
        if settings.refresh_max_attempts is not None:
            config_data["refresh"]["max_attempts"] = settings.refresh_max_attempts
        if settings.credentials_file:
            config_data["session"]["credentials_file"] = settings.credentials_file
        if settings.encrypt_tokens is not None:
            config_data["session"]["encrypt_tokens"] = settings.encrypt_tokens
        if settings.log_level:
            config_data["logging"]["level"] = settings.log_level.upper()
        if settings.log_format:
            config_data["logging"]["format"] = settings.log_format

        return config_data

    def save_config(self, config: Optional[StorefrontConfig] = None) -> None:
        """Save configuration to TOML file.

        Without an argument the file's own settings are written back; values
        coming from ``STOREFRONT_*`` variables are never persisted.
        """
        if config is None:
            config = self._validate(self._read_file_data())

        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        config_dict = self._remove_none_values(config.model_dump(mode="json"))

        try:
            with open(self.config_file, "wb") as f:
                tomli_w.dump(config_dict, f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot write configuration file {self.config_file}: {e}",
                help_text="Check that you have write permissions for the config directory",
            ) from e

    def set_value(self, dotted_key: str, value: Any) -> StorefrontConfig:
        """Set one value such as ``api.base_url`` in the config file.

        Returns the effective configuration, environment overrides included.
        """
        section_name, _, field_name = dotted_key.partition(".")
        section_field = StorefrontConfig.model_fields.get(section_name)
        section_model = section_field.annotation if section_field else None
        if not field_name or section_model is None or field_name not in section_model.model_fields:
            raise InvalidConfigurationError(dotted_key, value, "a known <section>.<field> key")

        file_data = self._read_file_data()
        existing = file_data.get(section_name)
        section = dict(existing) if isinstance(existing, dict) else {}
        section[field_name] = value
        file_data[section_name] = section

        self.save_config(self._validate(file_data, key=dotted_key))
        self._config = None
        return self.load_config()

    def get_value(self, dotted_key: str) -> Any:
        section_name, _, field_name = dotted_key.partition(".")
        section = getattr(self.load_config(), section_name, None)
        if section is None or not hasattr(section, field_name):
            raise InvalidConfigurationError(dotted_key, None, "a known <section>.<field> key")
        return getattr(section, field_name)

    def _remove_none_values(self, data):
        """Recursively remove None values; TOML has no null."""
        if isinstance(data, dict):
            return {k: self._remove_none_values(v) for k, v in data.items() if v is not None}
        elif isinstance(data, list):
            return [self._remove_none_values(item) for item in data if item is not None]
        else:
            return data

    def reset_config(self) -> None:
        """Reset configuration to defaults."""
        self.save_config(StorefrontConfig())
        self._config = None
