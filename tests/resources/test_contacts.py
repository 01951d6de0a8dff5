"""Tests for contact request builders."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from contextio.domain.models import RequestDescriptor
from contextio.domain.types import HttpMethod, ResponseShape, SortOrder
from contextio.resources import contacts
from contextio.resources.params import ContactsParams

ACCOUNT = "acct_1"
CONTACT_PATH = "2.0/accounts/acct_1/contacts/bob%40example.com"


class TestContacts:
    def test_list(self) -> None:
        d = contacts.get_contacts(ACCOUNT, ContactsParams(search="bob", sort_order=SortOrder.DESC))
        assert (d.method, d.path) == (HttpMethod.GET, "2.0/accounts/acct_1/contacts")
        assert d.response_shape == ResponseShape.DICTIONARY
        assert d.params == {"search": "bob", "sort_order": "desc"}

    def test_get_contact(self) -> None:
        d = contacts.get_contact(ACCOUNT, "bob@example.com")
        assert d.path == CONTACT_PATH
        assert d.response_shape == ResponseShape.DICTIONARY

    @pytest.mark.parametrize(
        ("builder", "resource"),
        [
            (contacts.get_contact_files, "files"),
            (contacts.get_contact_messages, "messages"),
            (contacts.get_contact_threads, "threads"),
        ],
    )
    def test_contact_listings(
        self, builder: Callable[..., RequestDescriptor], resource: str
    ) -> None:
        d = builder(ACCOUNT, "bob@example.com", {"limit": 3})
        assert d.method == HttpMethod.GET
        assert d.path == f"{CONTACT_PATH}/{resource}"
        assert d.response_shape == ResponseShape.ARRAY
        assert d.params == {"limit": "3"}
