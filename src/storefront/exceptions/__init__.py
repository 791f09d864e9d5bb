"""
storefront-client exception hierarchy.

Exception Hierarchy:
    StorefrontError (base)
    ├── ConfigurationError
    │   ├── InvalidConfigurationError
    │   └── ConfigurationValidationError
    ├── CredentialStoreError
    ├── ApiRequestError
    │   ├── TransportError
    │   │   └── RequestTimeoutError
    │   ├── AuthorizationError
    │   └── ResponseParseError
    └── CLIError
        ├── InvalidCommandError
        ├── MissingArgumentError
        └── UserAbortError
"""

from .api import (
    ApiRequestError,
    AuthorizationError,
    CredentialStoreError,
    RequestTimeoutError,
    ResponseParseError,
    TransportError,
)
from .base import ExceptionContext, StorefrontError
from .cli import CLIError, InvalidCommandError, MissingArgumentError, UserAbortError
from .config import (
    ConfigurationError,
    ConfigurationValidationError,
    InvalidConfigurationError,
)
from .templates import ErrorCodes

__all__ = [
    # Base
    "StorefrontError",
    "ExceptionContext",
    "ErrorCodes",
    # Request client
    "ApiRequestError",
    "AuthorizationError",
    "TransportError",
    "RequestTimeoutError",
    "ResponseParseError",
    "CredentialStoreError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigurationError",
    "ConfigurationValidationError",
    # CLI
    "CLIError",
    "InvalidCommandError",
    "MissingArgumentError",
    "UserAbortError",
]
