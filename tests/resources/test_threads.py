"""Tests for thread request builders."""

from __future__ import annotations

from contextio.domain.types import HttpMethod, ResponseShape
from contextio.resources import threads
from contextio.resources.params import ThreadsParams


class TestThreads:
    def test_list(self) -> None:
        d = threads.get_threads("acct_1", ThreadsParams(subject="Invoice", limit=10))
        assert (d.method, d.path) == (HttpMethod.GET, "2.0/accounts/acct_1/threads")
        assert d.response_shape == ResponseShape.ARRAY
        assert d.params == {"subject": "Invoice", "limit": "10"}

    def test_gmail_thread_id(self) -> None:
        d = threads.get_thread("acct_1", "gm-1484215489427914256")
        assert d.path == "2.0/accounts/acct_1/threads/gm-1484215489427914256"
        assert d.response_shape == ResponseShape.DICTIONARY
