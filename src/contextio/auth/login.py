"""Parsing of the connect-token response that completes authentication."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from contextio.domain.errors import AuthFailureError


def parse_login_response(response: Mapping[str, Any]) -> tuple[str, str, str]:
    """Extract ``(token, token_secret, account_id)`` from a connect-token response.

    The response of ``GET connect_tokens/<token>`` carries ``access_token``,
    ``access_token_secret``, and the account as ``account.id``.

    Raises:
        AuthFailureError: If any of the three values is missing or empty.
    """
    account = response.get("account")
    account_id = account.get("id") if isinstance(account, Mapping) else None
    token = response.get("access_token")
    token_secret = response.get("access_token_secret")

    missing = [
        name
        for name, value in (
            ("access_token", token),
            ("access_token_secret", token_secret),
            ("account.id", account_id),
        )
        if not value
    ]
    if missing:
        raise AuthFailureError(f"Connect token response is missing: {', '.join(missing)}")
    return str(token), str(token_secret), str(account_id)
