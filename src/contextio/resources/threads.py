"""Conversation threads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from contextio.domain.models import RequestDescriptor
from contextio.domain.types import HttpMethod, ResponseShape
from contextio.resources.params import ThreadsParams
from contextio.resources.paths import account_template, build_descriptor


def get_threads(
    account_id: str,
    fields: ThreadsParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.GET,
        account_template("threads"),
        ResponseShape.ARRAY,
        fields=fields,
        extra_params=extra_params,
        account_id=account_id,
    )


def get_thread(
    account_id: str,
    thread_id: str,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.GET,
        account_template("threads/{thread_id}"),
        ResponseShape.DICTIONARY,
        extra_params=extra_params,
        account_id=account_id,
        thread_id=thread_id,
    )
