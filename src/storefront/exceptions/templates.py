"""
Standardized error codes, message templates and recovery suggestions.

Keeps error text consistent across the request client, the credential
stores and the CLI.
"""

from typing import List


class ErrorCodes:
    """Programmatic error codes carried on StorefrontError.error_code."""

    # Request client
    API_REQUEST_FAILED = "API_REQUEST_FAILED"
    API_UNAUTHORIZED = "API_UNAUTHORIZED"
    API_TRANSPORT_FAILED = "API_TRANSPORT_FAILED"
    API_TIMEOUT = "API_TIMEOUT"
    API_BAD_RESPONSE = "API_BAD_RESPONSE"

    # Credentials
    CREDENTIALS_UNREADABLE = "CREDENTIALS_UNREADABLE"
    CREDENTIALS_UNWRITABLE = "CREDENTIALS_UNWRITABLE"

    # Configuration
    CONFIG_INVALID = "CONFIG_INVALID"
    CONFIG_VALIDATION = "CONFIG_VALIDATION"

    # CLI
    INVALID_COMMAND = "INVALID_COMMAND"
    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    USER_ABORT = "USER_ABORT"


class ErrorMessageTemplates:
    """Standardized error message templates."""

    HTTP_STATUS = "HTTP {status}"
    TRANSPORT_FAILED = "Could not reach {url}: {details}"
    TIMEOUT = "{method} {path} timed out after {timeout}s"
    BAD_RESPONSE = "{method} {path} returned a body that is not valid JSON"

    CONFIG_INVALID = "Invalid configuration for '{field}': got {value!r}, expected {expected}"

    CREDENTIALS_READ = "Cannot read stored session from {path}: {details}"
    CREDENTIALS_WRITE = "Cannot write stored session to {path}: {details}"


class RecoverySuggestions:
    """Standard recovery suggestions for common error scenarios."""

    @staticmethod
    def for_auth_error() -> List[str]:
        return [
            "Your session has expired or was revoked",
            "Run: storefront login",
        ]

    @staticmethod
    def for_connection_error(base_url: str) -> List[str]:
        return [
            "Check your internet connection",
            f"Verify the API is reachable at {base_url}",
            "Set STOREFRONT_API_URL if the API lives elsewhere",
        ]
