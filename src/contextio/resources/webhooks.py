"""Webhooks: callbacks the API invokes when matching mail arrives."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from contextio.domain.models import RequestDescriptor
from contextio.domain.types import HttpMethod, ResponseShape
from contextio.resources.params import WebhookParams
from contextio.resources.paths import account_template, build_descriptor

_COLLECTION = account_template("webhooks")
_MEMBER = account_template("webhooks/{webhook_id}")


def get_webhooks(
    account_id: str, extra_params: Mapping[str, Any] | None = None
) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.GET,
        _COLLECTION,
        ResponseShape.ARRAY,
        extra_params=extra_params,
        account_id=account_id,
    )


def create_webhook(
    account_id: str,
    callback_url: str,
    failure_notification_url: str,
    fields: WebhookParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """Register a webhook.

    Args:
        account_id: The account the webhook watches.
        callback_url: URL the API calls for each matching message.
        failure_notification_url: URL the API calls if the webhook fails.
        fields: Filters and delivery options.
        extra_params: Additional pass-through parameters.

    Returns:
        A PUT descriptor expecting a dictionary response.
    """
    return build_descriptor(
        HttpMethod.PUT,
        _COLLECTION,
        ResponseShape.DICTIONARY,
        fields=fields,
        params={"callback_url": callback_url, "failure_notif_url": failure_notification_url},
        extra_params=extra_params,
        account_id=account_id,
    )


def get_webhook(
    account_id: str,
    webhook_id: str,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.GET,
        _MEMBER,
        ResponseShape.DICTIONARY,
        extra_params=extra_params,
        account_id=account_id,
        webhook_id=webhook_id,
    )


def update_webhook(
    account_id: str,
    webhook_id: str,
    fields: WebhookParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.POST,
        _MEMBER,
        ResponseShape.DICTIONARY,
        fields=fields,
        extra_params=extra_params,
        account_id=account_id,
        webhook_id=webhook_id,
    )


def delete_webhook(account_id: str, webhook_id: str) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.DELETE,
        _MEMBER,
        ResponseShape.DICTIONARY,
        account_id=account_id,
        webhook_id=webhook_id,
    )
