"""Connect-token handshake: begin authentication and fetch the resulting account."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from contextio.domain.models import RequestDescriptor
from contextio.domain.types import (
    PROVIDER_EMAIL_HINTS,
    EmailProviderType,
    HttpMethod,
    ResponseShape,
)
from contextio.resources.paths import API_VERSION, account_template, build_descriptor


def _connect_tokens_template(account_id: str | None) -> str:
    # Without an account the token creates one; with an account it adds a source to it.
    if account_id:
        return account_template("connect_tokens")
    return f"{API_VERSION}/connect_tokens"


def begin_auth(
    provider_type: EmailProviderType,
    callback_url: str,
    account_id: str | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """Build the request that creates a connect token.

    The response carries ``browser_redirect_url``; once the user signs in
    there, the API redirects to ``callback_url`` with a ``contextio_token``
    query parameter.

    Args:
        provider_type: Provider to preselect on the hosted login page.
        callback_url: Where the API redirects after authentication.
        account_id: Existing account to attach the new source to, if any.
        extra_params: Additional connect-token parameters.

    Returns:
        A POST descriptor expecting a dictionary response.
    """
    params: dict[str, str] = {"callback_url": callback_url}
    hint = PROVIDER_EMAIL_HINTS.get(provider_type)
    if hint:
        params["email"] = hint

    segments = {"account_id": account_id} if account_id else {}
    return build_descriptor(
        HttpMethod.POST,
        _connect_tokens_template(account_id),
        ResponseShape.DICTIONARY,
        params=params,
        extra_params=extra_params,
        **segments,
    )


def fetch_account_with_connect_token(
    connect_token: str,
    account_id: str | None = None,
) -> RequestDescriptor:
    """Build the request that exchanges a connect token for account credentials."""
    template = f"{_connect_tokens_template(account_id)}/{{connect_token}}"
    segments = {"account_id": account_id} if account_id else {}
    return build_descriptor(
        HttpMethod.GET,
        template,
        ResponseShape.DICTIONARY,
        connect_token=connect_token,
        **segments,
    )


def redirect_url_from_response(response: Mapping[str, Any]) -> str | None:
    """Return the hosted login URL from a ``begin_auth`` response, if present."""
    url = response.get("browser_redirect_url")
    return str(url) if url else None
