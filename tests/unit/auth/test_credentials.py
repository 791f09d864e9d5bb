"""
Tests for the credential stores.
"""

import json
import os
import stat

import pytest

from storefront.auth import (
    CredentialPair,
    FileCredentialStore,
    MemoryCredentialStore,
    TokenEncryption,
    mask_token,
)
from storefront.exceptions import CredentialStoreError

USER = {"id": "u1", "name": "Asha"}


@pytest.mark.unit
class TestMaskToken:
    def test_masks_all_but_tail(self):
        assert mask_token("abcdefgh") == "****efgh"

    def test_short_and_empty(self):
        assert mask_token("abc") == "***"
        assert mask_token(None) == "[empty]"


@pytest.mark.unit
class TestMemoryCredentialStore:
    def test_empty_store(self):
        store = MemoryCredentialStore()

        assert store.load() is None
        assert store.get_token() is None
        assert store.get_refresh_token() is None
        assert store.get_user() is None

    def test_save_overwrites_whole_pair(self):
        store = MemoryCredentialStore(CredentialPair("T1", "R1", USER))

        store.save_auth("T2", None)

        assert store.load() == CredentialPair("T2", None, None)

    def test_clear(self):
        store = MemoryCredentialStore()
        store.save_auth("T1", USER, "R1")

        store.clear_auth()

        assert store.load() is None


@pytest.mark.unit
class TestFileCredentialStore:
    def test_round_trip(self, temp_dir):
        path = temp_dir / "session.json"
        FileCredentialStore(path).save_auth("T1", USER, "R1")

        reopened = FileCredentialStore(path)

        assert reopened.load() == CredentialPair("T1", "R1", USER)

    def test_file_layout(self, temp_dir):
        path = temp_dir / "nested" / "session.json"
        FileCredentialStore(path).save_auth("T1", USER, "R1")

        assert json.loads(path.read_text()) == {"token": "T1", "refreshToken": "R1", "user": USER}
        assert not path.with_suffix(".json.tmp").exists()

    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
    def test_file_is_private(self, temp_dir):
        path = temp_dir / "session.json"
        FileCredentialStore(path).save_auth("T1", USER, "R1")

        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_clear_removes_file(self, temp_dir):
        path = temp_dir / "session.json"
        store = FileCredentialStore(path)
        store.save_auth("T1", USER, "R1")

        store.clear_auth()
        store.clear_auth()

        assert not path.exists()
        assert store.load() is None

    def test_corrupt_file_raises(self, temp_dir):
        path = temp_dir / "session.json"
        path.write_text("{not json")

        with pytest.raises(CredentialStoreError) as exc_info:
            FileCredentialStore(path).load()

        assert exc_info.value.context["path"] == str(path)

    def test_reads_file_on_every_call(self, temp_dir):
        path = temp_dir / "session.json"
        store = FileCredentialStore(path)
        store.save_auth("T1", USER, "R1")

        FileCredentialStore(path).save_auth("T2", USER, "R2")

        assert store.get_token() == "T2"

    def test_encrypted_tokens(self, temp_dir):
        path = temp_dir / "session.json"
        encryption = TokenEncryption(temp_dir / "session.key")
        store = FileCredentialStore(path, encryption)

        store.save_auth("T1", USER, "R1")

        raw = json.loads(path.read_text())
        assert raw["token"].startswith("encrypted:")
        assert raw["refreshToken"].startswith("encrypted:")
        assert raw["user"] == USER
        assert store.load() == CredentialPair("T1", "R1", USER)

    def test_wrong_key_raises_store_error(self, temp_dir):
        path = temp_dir / "session.json"
        FileCredentialStore(path, TokenEncryption(temp_dir / "a.key")).save_auth("T1", USER, "R1")

        other = FileCredentialStore(path, TokenEncryption(temp_dir / "b.key"))

        with pytest.raises(CredentialStoreError):
            other.load()
