"""Account-level operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from contextio.domain.models import RequestDescriptor
from contextio.domain.types import HttpMethod, ResponseShape
from contextio.resources.paths import account_template, build_descriptor


def get_account(account_id: str) -> RequestDescriptor:
    """Retrieve an account's details."""
    return build_descriptor(
        HttpMethod.GET, account_template(), ResponseShape.DICTIONARY, account_id=account_id
    )


def update_account(
    account_id: str,
    first_name: str | None = None,
    last_name: str | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """Modify an account's first and/or last name. Omitted names are left unchanged."""
    return build_descriptor(
        HttpMethod.POST,
        account_template(),
        ResponseShape.DICTIONARY,
        params={"first_name": first_name, "last_name": last_name},
        extra_params=extra_params,
        account_id=account_id,
    )


def delete_account(account_id: str) -> RequestDescriptor:
    """Delete an account."""
    return build_descriptor(
        HttpMethod.DELETE, account_template(), ResponseShape.DICTIONARY, account_id=account_id
    )
