"""
Encryption of tokens at rest using Fernet symmetric encryption.
"""

import base64
import os
from pathlib import Path

from cryptography.fernet import Fernet, InvalidToken

from storefront.logging import get_logger

logger = get_logger(__name__)

ENCRYPTED_PREFIX = "encrypted:"


class TokenEncryption:
    """Encrypt and decrypt tokens with a per-user key file."""

    def __init__(self, key_file: Path):
        """
        Args:
            key_file: Path to the encryption key; created (mode 0600) when missing
        """
        self.key_file = Path(key_file)
        self._fernet = None

    def _ensure_key_exists(self) -> bytes:
        """Read the key, generating it on first use.

        Raises:
            RuntimeError: If the key file is readable by group or others
        """
        self.key_file.parent.mkdir(parents=True, exist_ok=True)

        if self.key_file.exists():
            self._validate_key_permissions()
            with open(self.key_file, "rb") as f:
                return f.read()

        key = Fernet.generate_key()
        fd = os.open(self.key_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(key)

        logger.info("Generated new session encryption key", key_file=str(self.key_file))
        return key

    def _validate_key_permissions(self) -> None:
        if os.name == "posix":
            if self.key_file.stat().st_mode & 0o077:
                raise RuntimeError(
                    f"Encryption key file {self.key_file} has insecure permissions. "
                    f"Fix with: chmod 600 {self.key_file}"
                )

    def _get_fernet(self) -> Fernet:
        if self._fernet is None:
            self._fernet = Fernet(self._ensure_key_exists())
        return self._fernet

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a token; values that are already encrypted pass through."""
        if not plaintext or self.is_encrypted(plaintext):
            return plaintext

        encrypted_bytes = self._get_fernet().encrypt(plaintext.encode("utf-8"))
        return ENCRYPTED_PREFIX + base64.b64encode(encrypted_bytes).decode("utf-8")

    def decrypt(self, value: str) -> str:
        """Decrypt a token; plaintext values are returned unchanged.

        Raises:
            ValueError: If decryption fails (key changed or data corrupted)
        """
        if not value or not self.is_encrypted(value):
            return value

        encrypted_b64 = value[len(ENCRYPTED_PREFIX):]
        try:
            decrypted = self._get_fernet().decrypt(base64.b64decode(encrypted_b64))
        except (InvalidToken, ValueError) as e:
            raise ValueError(
                "Failed to decrypt stored token. The encryption key may have changed "
                "or the session file is corrupted"
            ) from e
        return decrypted.decode("utf-8")

    @staticmethod
    def is_encrypted(value: str) -> bool:
        return bool(value and value.startswith(ENCRYPTED_PREFIX))
