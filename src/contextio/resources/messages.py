"""Messages and their bodies, flags, folders, headers, source, and thread.

Every ``message_id`` may be the ``message_id`` or ``email_message_id``
property of a message, or a Gmail id prefixed with ``gm-``.  Ids are passed
through as given.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from contextio.domain.models import RequestDescriptor
from contextio.domain.types import BodyType, HttpMethod, ResponseShape
from contextio.resources.encoding import encode_params
from contextio.resources.params import (
    MessageFlags,
    MessageParams,
    MessagesParams,
    MessageUpdateParams,
    ThreadParams,
)
from contextio.resources.paths import account_template, build_descriptor

logger = structlog.get_logger()

_MESSAGE = "messages/{message_id}"


def get_messages(
    account_id: str,
    fields: MessagesParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """List email messages for an account."""
    return build_descriptor(
        HttpMethod.GET,
        account_template("messages"),
        ResponseShape.ARRAY,
        fields=fields,
        extra_params=extra_params,
        account_id=account_id,
    )


def get_message(
    account_id: str,
    message_id: str,
    fields: MessageParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """Get file, contact, and other information about a message."""
    return build_descriptor(
        HttpMethod.GET,
        account_template(_MESSAGE),
        ResponseShape.DICTIONARY,
        fields=fields,
        extra_params=extra_params,
        account_id=account_id,
        message_id=message_id,
    )


def update_message(
    account_id: str,
    message_id: str,
    destination_folder: str,
    fields: MessageUpdateParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """Copy (or, with ``move=True``, move) a message to another folder.

    To move between sources of one account, set ``dst_source`` to the label
    of the destination source.
    """
    return build_descriptor(
        HttpMethod.POST,
        account_template(_MESSAGE),
        ResponseShape.DICTIONARY,
        fields=fields,
        params={"dst_folder": destination_folder},
        extra_params=extra_params,
        account_id=account_id,
        message_id=message_id,
    )


def delete_message(account_id: str, message_id: str) -> RequestDescriptor:
    """Delete a message from the source mail server.

    For IMAP this flags the message ``\\Deleted`` and expunges; for Gmail the
    message is moved to ``[Gmail]/Trash``.
    """
    return build_descriptor(
        HttpMethod.DELETE,
        account_template(_MESSAGE),
        ResponseShape.DICTIONARY,
        account_id=account_id,
        message_id=message_id,
    )


def get_message_body(
    account_id: str,
    message_id: str,
    body_type: BodyType | str | None = None,
) -> RequestDescriptor:
    """Fetch the text parts of a message, optionally only one MIME type."""
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_MESSAGE}/body"),
        ResponseShape.ARRAY,
        params={"type": body_type},
        account_id=account_id,
        message_id=message_id,
    )


def get_message_flags(account_id: str, message_id: str) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_MESSAGE}/flags"),
        ResponseShape.DICTIONARY,
        account_id=account_id,
        message_id=message_id,
    )


def update_message_flags(
    account_id: str, message_id: str, flags: MessageFlags
) -> RequestDescriptor:
    """Add (``True``) or remove (``False``) IMAP flags on a message."""
    return build_descriptor(
        HttpMethod.POST,
        account_template(f"{_MESSAGE}/flags"),
        ResponseShape.DICTIONARY,
        params=encode_params(flags),
        account_id=account_id,
        message_id=message_id,
    )


def get_message_folders(account_id: str, message_id: str) -> RequestDescriptor:
    """List the folders (Gmail labels) a message appears in."""
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_MESSAGE}/folders"),
        ResponseShape.ARRAY,
        account_id=account_id,
        message_id=message_id,
    )


def update_message_folders(
    account_id: str,
    message_id: str,
    add_to_folder: str | None = None,
    remove_from_folder: str | None = None,
) -> RequestDescriptor:
    """Add the message to one folder and/or remove it from another."""
    return build_descriptor(
        HttpMethod.POST,
        account_template(f"{_MESSAGE}/folders"),
        ResponseShape.DICTIONARY,
        params={"add": add_to_folder, "remove": remove_from_folder},
        account_id=account_id,
        message_id=message_id,
    )


def set_message_folders(
    account_id: str,
    message_id: str,
    folder_names: Sequence[str] = (),
    symbolic_folder_names: Sequence[str] = (),
) -> RequestDescriptor:
    """Replace the complete set of folders a message appears in.

    Folders may be given by IMAP name or by special-use symbolic name
    (e.g. ``\\Starred``); only one of the two is needed per folder.

    The API has been observed to reject the signature of this call, so the
    descriptor is marked ``unverified``.
    """
    logger.warning(
        "unverified_operation_built",
        operation="set_message_folders",
        message_id=message_id,
    )
    return build_descriptor(
        HttpMethod.PUT,
        account_template(f"{_MESSAGE}/folders"),
        ResponseShape.DICTIONARY,
        params={
            "name": list(folder_names) or None,
            "symbolic_name": list(symbolic_folder_names) or None,
        },
        unverified=True,
        account_id=account_id,
        message_id=message_id,
    )


def get_message_headers(account_id: str, message_id: str) -> RequestDescriptor:
    """Fetch the complete headers of a message, parsed into arrays."""
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_MESSAGE}/headers"),
        ResponseShape.DICTIONARY,
        account_id=account_id,
        message_id=message_id,
    )


def get_message_raw_headers(account_id: str, message_id: str) -> RequestDescriptor:
    """Fetch the complete headers of a message as one unparsed string."""
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_MESSAGE}/headers"),
        ResponseShape.STRING,
        params={"raw": True},
        account_id=account_id,
        message_id=message_id,
    )


def get_message_source(account_id: str, message_id: str) -> RequestDescriptor:
    """Fetch the raw RFC 822 source of a message, attachments included."""
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_MESSAGE}/source"),
        ResponseShape.RAW,
        account_id=account_id,
        message_id=message_id,
    )


def get_message_thread(
    account_id: str,
    message_id: str,
    fields: ThreadParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """List the other messages in the same thread as a message."""
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_MESSAGE}/thread"),
        ResponseShape.DICTIONARY,
        fields=fields,
        extra_params=extra_params,
        account_id=account_id,
        message_id=message_id,
    )
