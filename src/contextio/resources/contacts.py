"""Contacts and the messages, files, and threads exchanged with them."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from contextio.domain.models import RequestDescriptor
from contextio.domain.types import HttpMethod, ResponseShape
from contextio.resources.params import ContactsParams
from contextio.resources.paths import account_template, build_descriptor


def get_contacts(
    account_id: str,
    fields: ContactsParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """List the account's contacts. The response wraps them in a ``matches`` object."""
    return build_descriptor(
        HttpMethod.GET,
        account_template("contacts"),
        ResponseShape.DICTIONARY,
        fields=fields,
        extra_params=extra_params,
        account_id=account_id,
    )


def get_contact(account_id: str, email: str) -> RequestDescriptor:
    """Retrieve the contact with the given email address."""
    return build_descriptor(
        HttpMethod.GET,
        account_template("contacts/{email}"),
        ResponseShape.DICTIONARY,
        account_id=account_id,
        email=email,
    )


def _contact_listing(
    resource: str,
    account_id: str,
    email: str,
    extra_params: Mapping[str, Any] | None,
) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"contacts/{{email}}/{resource}"),
        ResponseShape.ARRAY,
        extra_params=extra_params,
        account_id=account_id,
        email=email,
    )


def get_contact_files(
    account_id: str, email: str, extra_params: Mapping[str, Any] | None = None
) -> RequestDescriptor:
    """List files exchanged with a contact."""
    return _contact_listing("files", account_id, email, extra_params)


def get_contact_messages(
    account_id: str, email: str, extra_params: Mapping[str, Any] | None = None
) -> RequestDescriptor:
    """List messages exchanged with a contact."""
    return _contact_listing("messages", account_id, email, extra_params)


def get_contact_threads(
    account_id: str, email: str, extra_params: Mapping[str, Any] | None = None
) -> RequestDescriptor:
    """List threads exchanged with a contact."""
    return _contact_listing("threads", account_id, email, extra_params)
