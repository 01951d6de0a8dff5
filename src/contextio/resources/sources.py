"""IMAP sources, their folders, and sync status.

A source is identified by its ``label``; ``"0"`` is accepted as an alias for
the first source of the account.  Folder paths use ``/`` as the hierarchy
delimiter unless a different ``delim`` is passed.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from contextio.domain.models import RequestDescriptor
from contextio.domain.types import HttpMethod, ResponseShape
from contextio.resources.params import (
    FolderMessagesParams,
    SourceCreateParams,
    SourceModifyParams,
    SourcesParams,
)
from contextio.resources.paths import account_template, build_descriptor

FIRST_SOURCE = "0"

_SOURCE = "sources/{source_label}"
_FOLDER = f"{_SOURCE}/folders/{{folder_path}}"


def get_sources(
    account_id: str,
    fields: SourcesParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """List IMAP sources assigned to an account."""
    return build_descriptor(
        HttpMethod.GET,
        account_template("sources"),
        ResponseShape.ARRAY,
        fields=fields,
        extra_params=extra_params,
        account_id=account_id,
    )


def create_source(
    account_id: str,
    email: str,
    server: str,
    username: str,
    use_ssl: bool,
    port: int,
    source_type: str = "IMAP",
    fields: SourceCreateParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """Add an IMAP source to an account.

    The connect-token flow (``begin_auth``) is usually preferable, since it
    avoids handling the mailbox password.
    """
    return build_descriptor(
        HttpMethod.POST,
        account_template("sources"),
        ResponseShape.DICTIONARY,
        fields=fields,
        params={
            "email": email,
            "server": server,
            "username": username,
            "use_ssl": use_ssl,
            "port": port,
            "type": source_type,
        },
        extra_params=extra_params,
        account_id=account_id,
    )


def get_source(account_id: str, source_label: str) -> RequestDescriptor:
    """Get parameters and status for a source."""
    return build_descriptor(
        HttpMethod.GET,
        account_template(_SOURCE),
        ResponseShape.DICTIONARY,
        account_id=account_id,
        source_label=source_label,
    )


def update_source(
    account_id: str,
    source_label: str,
    fields: SourceModifyParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.POST,
        account_template(_SOURCE),
        ResponseShape.DICTIONARY,
        fields=fields,
        extra_params=extra_params,
        account_id=account_id,
        source_label=source_label,
    )


def delete_source(account_id: str, source_label: str) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.DELETE,
        account_template(_SOURCE),
        ResponseShape.DICTIONARY,
        account_id=account_id,
        source_label=source_label,
    )


def get_source_folders(
    account_id: str,
    source_label: str,
    include_extended_counts: bool | None = None,
    no_cache: bool | None = None,
) -> RequestDescriptor:
    """List the folders of a source.

    Both flags force a round trip to the IMAP server and slow the call down.
    """
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_SOURCE}/folders"),
        ResponseShape.ARRAY,
        params={"include_extended_counts": include_extended_counts, "no_cache": no_cache},
        account_id=account_id,
        source_label=source_label,
    )


def get_folder(
    account_id: str,
    source_label: str,
    folder_path: str,
    include_extended_counts: bool | None = None,
    delim: str | None = None,
) -> RequestDescriptor:
    """Get the IMAP attributes and counts of a folder."""
    return build_descriptor(
        HttpMethod.GET,
        account_template(_FOLDER),
        ResponseShape.DICTIONARY,
        params={"include_extended_counts": include_extended_counts, "delim": delim},
        account_id=account_id,
        source_label=source_label,
        folder_path=folder_path,
    )


def create_folder(
    account_id: str,
    source_label: str,
    folder_path: str,
    delim: str | None = None,
) -> RequestDescriptor:
    """Create a folder by PUTting its path under the source's folders."""
    return build_descriptor(
        HttpMethod.PUT,
        account_template(_FOLDER),
        ResponseShape.DICTIONARY,
        params={"delim": delim},
        account_id=account_id,
        source_label=source_label,
        folder_path=folder_path,
    )


def delete_folder(account_id: str, source_label: str, folder_path: str) -> RequestDescriptor:
    """Permanently remove a folder and every message in it."""
    return build_descriptor(
        HttpMethod.DELETE,
        account_template(_FOLDER),
        ResponseShape.DICTIONARY,
        account_id=account_id,
        source_label=source_label,
        folder_path=folder_path,
    )


def expunge_folder(account_id: str, source_label: str, folder_path: str) -> RequestDescriptor:
    """Run ``EXPUNGE`` on a folder, removing messages flagged for deletion."""
    return build_descriptor(
        HttpMethod.POST,
        account_template(f"{_FOLDER}/expunge"),
        ResponseShape.DICTIONARY,
        account_id=account_id,
        source_label=source_label,
        folder_path=folder_path,
    )


def get_folder_messages(
    account_id: str,
    source_label: str,
    folder_path: str,
    fields: FolderMessagesParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """List messages in a folder, checking the IMAP server for new ones first."""
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_FOLDER}/messages"),
        ResponseShape.ARRAY,
        fields=fields,
        extra_params=extra_params,
        account_id=account_id,
        source_label=source_label,
        folder_path=folder_path,
    )


def get_source_sync_status(account_id: str, source_label: str) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_SOURCE}/sync"),
        ResponseShape.DICTIONARY,
        account_id=account_id,
        source_label=source_label,
    )


def force_source_sync(account_id: str, source_label: str) -> RequestDescriptor:
    """Start a sync job for one source."""
    return build_descriptor(
        HttpMethod.POST,
        account_template(f"{_SOURCE}/sync"),
        ResponseShape.DICTIONARY,
        account_id=account_id,
        source_label=source_label,
    )


def get_sync_status(account_id: str) -> RequestDescriptor:
    """Get last-sync timestamps for every source of the account."""
    return build_descriptor(
        HttpMethod.GET, account_template("sync"), ResponseShape.DICTIONARY, account_id=account_id
    )


def force_sync(account_id: str) -> RequestDescriptor:
    """Start a sync job for every source of the account."""
    return build_descriptor(
        HttpMethod.POST, account_template("sync"), ResponseShape.DICTIONARY, account_id=account_id
    )
