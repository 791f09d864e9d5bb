"""
Request client exceptions.

Every failure of an API call surfaces as an ApiRequestError. Subclasses only
narrow the cause; callers that don't care catch the base class.
"""

from typing import Any, Optional

from .base import ExceptionContext, StorefrontError
from .templates import ErrorCodes, ErrorMessageTemplates, RecoverySuggestions


class ApiRequestError(StorefrontError):
    """Raised when an API call does not produce a usable JSON result."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        method: Optional[str] = None,
        path: Optional[str] = None,
        payload: Any = None,
        error_code: str = ErrorCodes.API_REQUEST_FAILED,
        help_text: Optional[str] = None,
    ):
        self.status_code = status_code
        self.method = method
        self.path = path
        self.payload = payload
        context = ExceptionContext(
            help_text=help_text,
            error_code=error_code,
            context={"method": method, "path": path, "status_code": status_code},
        )
        super().__init__(message, context)


class AuthorizationError(ApiRequestError):
    """Raised for a 401 that survived the refresh-and-retry path."""

    def __init__(self, message: str, method: Optional[str] = None,
                 path: Optional[str] = None, payload: Any = None):
        super().__init__(
            message,
            status_code=401,
            method=method,
            path=path,
            payload=payload,
            error_code=ErrorCodes.API_UNAUTHORIZED,
            help_text=RecoverySuggestions.for_auth_error()[0],
        )
        self.user_action = RecoverySuggestions.for_auth_error()[1]


class TransportError(ApiRequestError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, url: str, details: str, method: Optional[str] = None,
                 path: Optional[str] = None, error_code: str = ErrorCodes.API_TRANSPORT_FAILED):
        self.url = url
        message = ErrorMessageTemplates.TRANSPORT_FAILED.format(url=url, details=details)
        super().__init__(
            message,
            method=method,
            path=path,
            error_code=error_code,
            help_text=RecoverySuggestions.for_connection_error(url)[0],
        )
        self.technical_details = details


class RequestTimeoutError(TransportError):
    """Raised when a request exceeded its deadline."""

    def __init__(self, url: str, timeout: float, method: Optional[str] = None,
                 path: Optional[str] = None):
        self.timeout = timeout
        details = ErrorMessageTemplates.TIMEOUT.format(method=method, path=path, timeout=timeout)
        super().__init__(url, details, method=method, path=path, error_code=ErrorCodes.API_TIMEOUT)


class ResponseParseError(ApiRequestError):
    """Raised when a successful response carries a body that is not JSON."""

    def __init__(self, method: str, path: str, status_code: int, details: Optional[str] = None):
        message = ErrorMessageTemplates.BAD_RESPONSE.format(method=method, path=path)
        super().__init__(
            message,
            status_code=status_code,
            method=method,
            path=path,
            error_code=ErrorCodes.API_BAD_RESPONSE,
        )
        self.technical_details = details


class CredentialStoreError(StorefrontError):
    """Raised when the persisted session cannot be read or written."""

    def __init__(self, message: str, path: Optional[str] = None,
                 error_code: str = ErrorCodes.CREDENTIALS_UNREADABLE):
        context = ExceptionContext(
            help_text="Delete the session file and log in again",
            error_code=error_code,
            context={"path": path},
        )
        super().__init__(message, context)
