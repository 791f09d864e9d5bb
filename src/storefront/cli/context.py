"""
Objects shared by every command through ``click.Context.obj``.
"""

from pathlib import Path
from typing import Optional

from ..api import Storefront
from ..auth import FileCredentialStore, TokenEncryption
from ..constants import ENCRYPTION_KEY_FILE_NAME
from ..core.config import ConfigManager, StorefrontConfig


class CliContext:
    """Lazily builds the configuration, the session store and the API facade."""

    def __init__(self, config_file: Optional[Path] = None, api_url: Optional[str] = None):
        self.config_manager = ConfigManager(config_file)
        self.api_url = api_url
        self._shop: Optional[Storefront] = None

    @property
    def config(self) -> StorefrontConfig:
        config = self.config_manager.load_config()
        if self.api_url:
            config = config.model_copy(update={"api": config.api.model_copy(
                update={"base_url": self.api_url.rstrip("/")})})
        return config

    def build_store(self) -> FileCredentialStore:
        path = self.config_manager.credentials_file
        encryption = None
        if self.config.session.encrypt_tokens:
            encryption = TokenEncryption(path.parent / ENCRYPTION_KEY_FILE_NAME)
        return FileCredentialStore(path, encryption)

    @property
    def shop(self) -> Storefront:
        if self._shop is None:
            self._shop = Storefront.from_config(self.config, store=self.build_store())
        return self._shop

    def close(self) -> None:
        if self._shop is not None:
            self._shop.close()
            self._shop = None
