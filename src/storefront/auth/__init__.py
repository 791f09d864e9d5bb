"""Session credentials and token refresh."""

from .credentials import (
    CredentialPair,
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
    mask_token,
)
from .encryption import TokenEncryption
from .refresher import TokenRefresher
from .single_flight import SingleFlight

__all__ = [
    "CredentialPair",
    "CredentialStore",
    "MemoryCredentialStore",
    "FileCredentialStore",
    "TokenEncryption",
    "TokenRefresher",
    "SingleFlight",
    "mask_token",
]
