"""
Configuration-related exceptions.

All exceptions related to configuration parsing, validation, and management.
"""

from typing import Any, List, Optional

from .base import ExceptionContext, StorefrontError
from .templates import ErrorCodes, ErrorMessageTemplates


class ConfigurationError(StorefrontError):
    """Base class for configuration-related errors."""

    def __init__(self, message: str, help_text: Optional[str] = None,
                 context: Optional[ExceptionContext] = None):
        if context is None:
            context = ExceptionContext(help_text=help_text)
        super().__init__(message, context)


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration contains invalid values."""

    def __init__(self, field: str, value: Any, expected: str):
        self.field = field
        self.value = value
        self.expected = expected
        message = ErrorMessageTemplates.CONFIG_INVALID.format(
            field=field, value=value, expected=expected
        )
        context = ExceptionContext(
            help_text=f"Check the configuration for '{field}'; expected {expected}",
            error_code=ErrorCodes.CONFIG_INVALID,
            user_action="Run 'storefront config --show' to inspect current values",
        )
        super().__init__(message, context=context)


class ConfigurationValidationError(ConfigurationError):
    """Raised when configuration fails validation."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        message = "Configuration validation failed:"
        for error in errors:
            message += f"\n  - {error}"

        context = ExceptionContext(
            help_text="Fix the validation errors listed above in your configuration file",
            error_code=ErrorCodes.CONFIG_VALIDATION,
            user_action="Run 'storefront config --reset' to start from defaults",
        )
        super().__init__(message, context=context)
