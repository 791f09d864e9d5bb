"""
Credential pair persistence.

The request client treats a CredentialStore as the only authority for the
current session: it reads the store on every send and never keeps tokens of
its own.
"""

import json
import os
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from storefront.exceptions.api import CredentialStoreError
from storefront.exceptions.templates import ErrorCodes, ErrorMessageTemplates
from storefront.logging import get_logger

from .encryption import TokenEncryption

logger = get_logger(__name__)


def mask_token(token: Optional[str], visible_chars: int = 4) -> str:
    """Mask a token for display/logging purposes."""
    if not token:
        return "[empty]"
    if len(token) <= visible_chars:
        return "*" * len(token)
    return "*" * (len(token) - visible_chars) + token[-visible_chars:]


@dataclass(frozen=True)
class CredentialPair:
    """The current session: access token, refresh token and user profile."""

    access_token: str
    refresh_token: Optional[str] = None
    user: Optional[Dict[str, Any]] = None


class CredentialStore(ABC):
    """Holds at most one credential pair."""

    @abstractmethod
    def load(self) -> Optional[CredentialPair]:
        """Return the stored pair, or None when logged out."""

    @abstractmethod
    def save_auth(self, token: str, user: Optional[Dict[str, Any]],
                  refresh_token: Optional[str] = None) -> None:
        """Replace the stored pair."""

    @abstractmethod
    def clear_auth(self) -> None:
        """Forget the stored pair."""

    def get_token(self) -> Optional[str]:
        pair = self.load()
        return pair.access_token if pair else None

    def get_refresh_token(self) -> Optional[str]:
        pair = self.load()
        return pair.refresh_token if pair else None

    def get_user(self) -> Optional[Dict[str, Any]]:
        pair = self.load()
        return pair.user if pair else None


class MemoryCredentialStore(CredentialStore):
    """Process-local store; the default for library use."""

    def __init__(self, pair: Optional[CredentialPair] = None):
        self._lock = threading.Lock()
        self._pair = pair

    def load(self) -> Optional[CredentialPair]:
        with self._lock:
            return self._pair

    def save_auth(self, token, user, refresh_token=None):
        with self._lock:
            self._pair = CredentialPair(token, refresh_token, user)

    def clear_auth(self):
        with self._lock:
            self._pair = None


class FileCredentialStore(CredentialStore):
    """JSON session file readable only by its owner.

    With an encryptor, both tokens are stored encrypted; the user profile is
    kept in clear so ``whoami`` works without the key.
    """

    def __init__(self, path: Path, encryption: Optional[TokenEncryption] = None):
        self.path = Path(path)
        self.encryption = encryption
        self._lock = threading.Lock()

    def load(self) -> Optional[CredentialPair]:
        with self._lock:
            data = self._read()
        if not data or not data.get("token"):
            return None
        return CredentialPair(
            access_token=self._decode(data["token"]),
            refresh_token=self._decode(data.get("refreshToken")),
            user=data.get("user"),
        )

    def save_auth(self, token, user, refresh_token=None):
        data = {
            "token": self._encode(token),
            "refreshToken": self._encode(refresh_token),
            "user": user,
        }
        with self._lock:
            self._write(data)
        logger.debug("Session saved", path=str(self.path), token=mask_token(token))

    def clear_auth(self):
        with self._lock:
            try:
                self.path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                raise CredentialStoreError(
                    ErrorMessageTemplates.CREDENTIALS_WRITE.format(path=self.path, details=e),
                    path=str(self.path),
                    error_code=ErrorCodes.CREDENTIALS_UNWRITABLE,
                ) from e
        logger.debug("Session cleared", path=str(self.path))

    def _read(self) -> Optional[Dict[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            raise CredentialStoreError(
                ErrorMessageTemplates.CREDENTIALS_READ.format(path=self.path, details=e),
                path=str(self.path),
            ) from e

    def _write(self, data: Dict[str, Any]) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise CredentialStoreError(
                ErrorMessageTemplates.CREDENTIALS_WRITE.format(path=self.path, details=e),
                path=str(self.path),
                error_code=ErrorCodes.CREDENTIALS_UNWRITABLE,
            ) from e

    def _encode(self, value: Optional[str]) -> Optional[str]:
        if value is None or self.encryption is None:
            return value
        return self.encryption.encrypt(value)

    def _decode(self, value: Optional[str]) -> Optional[str]:
        if value is None or self.encryption is None:
            return value
        try:
            return self.encryption.decrypt(value)
        except ValueError as e:
            raise CredentialStoreError(
                ErrorMessageTemplates.CREDENTIALS_READ.format(path=self.path, details=e),
                path=str(self.path),
            ) from e
