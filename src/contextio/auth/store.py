"""Credential persistence collaborators.

Stores are keyed by consumer key so several API keys can keep their
authorized accounts side by side.  The client never loads from a store
implicitly; callers decide when to call ``restore_credentials``.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Protocol

import structlog

from contextio.domain.models import Credentials

logger = structlog.get_logger()

DEFAULT_CREDENTIALS_PATH: str = "contextio_credentials.json"


class CredentialStore(Protocol):
    """Persistence for authorized credentials, keyed by consumer key."""

    def save(self, credentials: Credentials) -> None: ...

    def load(self, consumer_key: str) -> Credentials | None: ...

    def clear(self, consumer_key: str) -> None: ...


class InMemoryCredentialStore:
    """Process-local store, useful for tests and short-lived scripts."""

    def __init__(self) -> None:
        self._entries: dict[str, Credentials] = {}

    def save(self, credentials: Credentials) -> None:
        self._entries[credentials.consumer_key] = credentials

    def load(self, consumer_key: str) -> Credentials | None:
        return self._entries.get(consumer_key)

    def clear(self, consumer_key: str) -> None:
        self._entries.pop(consumer_key, None)


class JsonFileCredentialStore:
    """Store credentials in a JSON document mapping consumer key to credentials.

    The file holds the token secret in clear text.  Each write goes to a
    sibling file created with ``0600`` permissions which then replaces the
    document, so secrets never sit in a world-readable file.  The consumer
    secret is not stored; the client supplies its own on restore.  A missing
    file is treated as an empty store.

    Args:
        path: Location of the JSON document.
    """

    def __init__(self, path: str | Path = DEFAULT_CREDENTIALS_PATH) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text(encoding="utf-8"))
        return dict(data)

    def _write(self, entries: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        staging = self._path.with_name(f"{self._path.name}.tmp")
        staging.unlink(missing_ok=True)
        fd = os.open(staging, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(entries, fh, indent=2, sort_keys=True)
        os.replace(staging, self._path)

    def save(self, credentials: Credentials) -> None:
        entries = self._read()
        entries[credentials.consumer_key] = credentials.to_storage()
        self._write(entries)
        logger.info("credentials_saved", path=str(self._path), account_id=credentials.account_id)

    def load(self, consumer_key: str) -> Credentials | None:
        entry = self._read().get(consumer_key)
        if entry is None:
            return None
        return Credentials.from_storage(entry)

    def clear(self, consumer_key: str) -> None:
        entries = self._read()
        if entries.pop(consumer_key, None) is not None:
            self._write(entries)
            logger.info("credentials_cleared", path=str(self._path))
