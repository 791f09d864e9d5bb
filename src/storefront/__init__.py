"""
storefront-client: Python client for the storefront and admin REST API.

Architecture Overview:
- api: authenticated request client (single-flight token refresh) and
  typed resource wrappers
- auth: credential stores, token encryption, refresh coordination
- http: requests transport and response helpers
- models: canonical dataclasses and wire-shape normalizers
- core: configuration
- cli: operator command line
- logging, exceptions, resilience: cross-cutting concerns
"""

__version__ = "0.3.0"

from .api import ApiClient, Multipart, Storefront
from .auth import FileCredentialStore, MemoryCredentialStore
from .core.config import ConfigManager, StorefrontConfig
from .exceptions import ApiRequestError, AuthorizationError, StorefrontError

__all__ = [
    "ApiClient",
    "Multipart",
    "Storefront",
    "MemoryCredentialStore",
    "FileCredentialStore",
    "ConfigManager",
    "StorefrontConfig",
    "StorefrontError",
    "ApiRequestError",
    "AuthorizationError",
]
