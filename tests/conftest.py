"""Shared pytest fixtures for the Context.IO client test suite."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest
from pydantic import SecretStr

from contextio.auth.store import InMemoryCredentialStore
from contextio.client import ContextIOClient
from contextio.domain.models import Credentials
from contextio.transport.http import HttpTransport

ACCOUNT_ID = "acct_4f2a"
CONSUMER_KEY = "ck_test"
CONSUMER_SECRET = "cs_test"
TOKEN = "tok_test"
TOKEN_SECRET = "ts_test"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def consumer_credentials() -> Credentials:
    """Consumer key and secret only (two-legged)."""
    return Credentials(consumer_key=CONSUMER_KEY, consumer_secret=SecretStr(CONSUMER_SECRET))


@pytest.fixture
def authorized_credentials() -> Credentials:
    """A complete set of three-legged credentials."""
    return Credentials(
        consumer_key=CONSUMER_KEY,
        consumer_secret=SecretStr(CONSUMER_SECRET),
        token=TOKEN,
        token_secret=SecretStr(TOKEN_SECRET),
        account_id=ACCOUNT_ID,
    )


@pytest.fixture
def credential_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def client(credential_store: InMemoryCredentialStore) -> ContextIOClient:
    """An authorized client that never touches the network."""
    return ContextIOClient(
        CONSUMER_KEY,
        CONSUMER_SECRET,
        token=TOKEN,
        token_secret=TOKEN_SECRET,
        account_id=ACCOUNT_ID,
        credential_store=credential_store,
    )


@pytest.fixture
def mock_transport_factory() -> Callable[[Handler], HttpTransport]:
    """Build an ``HttpTransport`` whose requests are answered by ``handler``."""

    def _factory(handler: Handler) -> HttpTransport:
        return HttpTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))

    return _factory
