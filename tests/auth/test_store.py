"""Tests for credential stores."""

from __future__ import annotations

import json
import os
import stat
from pathlib import Path
from unittest.mock import patch

from pydantic import SecretStr

from contextio.auth.store import InMemoryCredentialStore, JsonFileCredentialStore
from contextio.client import ContextIOClient
from contextio.domain.models import Credentials


class TestInMemoryStore:
    def test_save_load_clear(self, authorized_credentials: Credentials) -> None:
        store = InMemoryCredentialStore()
        store.save(authorized_credentials)
        assert store.load(authorized_credentials.consumer_key) == authorized_credentials

        store.clear(authorized_credentials.consumer_key)
        assert store.load(authorized_credentials.consumer_key) is None

    def test_clear_unknown_key_is_noop(self) -> None:
        InMemoryCredentialStore().clear("nope")


class TestJsonFileStore:
    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = JsonFileCredentialStore(tmp_path / "creds.json")
        assert store.load("ck_test") is None

    def test_round_trip_reveals_secrets_on_disk(
        self, tmp_path: Path, authorized_credentials: Credentials
    ) -> None:
        path = tmp_path / "nested" / "creds.json"
        store = JsonFileCredentialStore(path)
        store.save(authorized_credentials)

        on_disk = json.loads(path.read_text())
        assert on_disk["ck_test"]["token_secret"] == "ts_test"
        assert on_disk["ck_test"]["account_id"] == "acct_4f2a"
        assert "consumer_secret" not in on_disk["ck_test"]

        loaded = store.load("ck_test")
        assert loaded is not None
        assert loaded.token == "tok_test"
        assert loaded.token_secret_value == "ts_test"
        assert loaded.is_authorized

    def test_file_is_private(self, tmp_path: Path, authorized_credentials: Credentials) -> None:
        path = tmp_path / "creds.json"
        JsonFileCredentialStore(path).save(authorized_credentials)
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_secrets_written_to_private_file(
        self, tmp_path: Path, authorized_credentials: Credentials
    ) -> None:
        path = tmp_path / "creds.json"
        with patch("contextio.auth.store.os.open", wraps=os.open) as opened:
            JsonFileCredentialStore(path).save(authorized_credentials)

        opened.assert_called_once()
        assert opened.call_args.args[2] == 0o600
        assert not (tmp_path / "creds.json.tmp").exists()

    def test_existing_readable_file_becomes_private(
        self, tmp_path: Path, authorized_credentials: Credentials
    ) -> None:
        path = tmp_path / "creds.json"
        path.write_text("{}")
        path.chmod(0o644)

        JsonFileCredentialStore(path).save(authorized_credentials)
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_restore_uses_client_consumer_secret(
        self, tmp_path: Path, authorized_credentials: Credentials
    ) -> None:
        store = JsonFileCredentialStore(tmp_path / "creds.json")
        store.save(authorized_credentials)

        c = ContextIOClient("ck_test", "cs_test", credential_store=store)
        assert c.restore_credentials() is True
        assert c.credentials == authorized_credentials

    def test_keys_are_independent(
        self, tmp_path: Path, authorized_credentials: Credentials
    ) -> None:
        store = JsonFileCredentialStore(tmp_path / "creds.json")
        other = Credentials(
            consumer_key="ck_other",
            consumer_secret=SecretStr("cs_other"),
            token="t",
            token_secret=SecretStr("s"),
            account_id="acct_other",
        )
        store.save(authorized_credentials)
        store.save(other)
        store.clear("ck_test")

        assert store.load("ck_test") is None
        loaded = store.load("ck_other")
        assert loaded is not None
        assert loaded.account_id == "acct_other"
