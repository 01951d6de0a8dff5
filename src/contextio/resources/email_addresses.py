"""Email address aliases configured on an account."""

from __future__ import annotations

from contextio.domain.models import RequestDescriptor
from contextio.domain.types import HttpMethod, ResponseShape
from contextio.resources.paths import account_template, build_descriptor

_COLLECTION = account_template("email_addresses")
_MEMBER = account_template("email_addresses/{email}")


def get_email_addresses(account_id: str) -> RequestDescriptor:
    return build_descriptor(HttpMethod.GET, _COLLECTION, ResponseShape.ARRAY, account_id=account_id)


def add_email_address(account_id: str, email: str) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.POST,
        _COLLECTION,
        ResponseShape.DICTIONARY,
        params={"email": email},
        account_id=account_id,
    )


def update_email_address(account_id: str, email: str, primary: bool) -> RequestDescriptor:
    """Make ``email`` the account's primary address (or not)."""
    return build_descriptor(
        HttpMethod.POST,
        _MEMBER,
        ResponseShape.DICTIONARY,
        params={"primary": primary},
        account_id=account_id,
        email=email,
    )


def delete_email_address(account_id: str, email: str) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.DELETE, _MEMBER, ResponseShape.DICTIONARY, account_id=account_id, email=email
    )
