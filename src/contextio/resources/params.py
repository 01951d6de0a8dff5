"""Typed parameter sets, one per API operation.

Every field defaults to ``None``, which means "not set by the caller" and is
never sent over the wire; the API applies its own default instead.  Setting a
boolean to ``False`` or an integer to ``0`` is an explicit choice and *is*
sent.  Values are not validated locally: every scalar field also accepts a
string, which is passed through untouched, so malformed values only surface
as an error from the API.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from contextio.domain.types import BodyType, IncludeHeaders, SortOrder

# Scalars also accept strings, which are sent verbatim for the server to judge.
Flag = bool | str
Number = int | str
# Timestamps may be given as datetimes or as Unix seconds.
Timestamp = datetime | int | str
# Address filters accept one address or several (OR-combined by the API).
AddressList = str | list[str]


class ParameterSet(BaseModel):
    """Base class for per-operation parameter sets."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class SearchParams(ParameterSet):
    """Filters shared by the message, file, and thread listings."""

    email: AddressList | None = None
    to: AddressList | None = None
    from_: AddressList | None = Field(default=None, alias="from")
    cc: AddressList | None = None
    bcc: AddressList | None = None
    date_before: Timestamp | None = None
    date_after: Timestamp | None = None
    indexed_before: Timestamp | None = None
    indexed_after: Timestamp | None = None
    sort_order: SortOrder | str | None = None
    limit: Number | None = None
    offset: Number | None = None


class MessagesParams(SearchParams):
    """Parameters for listing messages (``GET accounts/<id>/messages``).

    ``subject`` is a plain substring unless it starts and ends with ``/``, in
    which case the API treats it as a regular expression.  ``folder`` may be a
    full folder path or a symbolic name such as ``\\Starred``.
    """

    subject: str | None = None
    folder: str | None = None
    source: str | None = None
    file_name: str | None = None
    file_size_min: Number | None = None
    file_size_max: Number | None = None
    include_thread_size: Flag | None = None
    include_body: Flag | None = None
    include_headers: IncludeHeaders | str | None = None
    include_flags: Flag | None = None
    body_type: BodyType | str | None = None
    include_source: Flag | None = None


class ThreadParams(ParameterSet):
    """Parameters for the thread of a message (``messages/<id>/thread``)."""

    include_body: Flag | None = None
    include_headers: IncludeHeaders | str | None = None
    include_flags: Flag | None = None
    body_type: BodyType | str | None = None
    limit: Number | None = None
    offset: Number | None = None


class MessageParams(ThreadParams):
    """Parameters for a single message. ``limit`` and ``offset`` are ignored by the API."""

    include_thread_size: Flag | None = None
    include_source: Flag | None = None


class MessageFlags(ParameterSet):
    """IMAP flags to add (``True``) or remove (``False``) on a message."""

    seen: Flag | None = None
    answered: Flag | None = None
    flagged: Flag | None = None
    deleted: Flag | None = None
    draft: Flag | None = None


class MessageUpdateParams(ParameterSet):
    """Optional parameters when copying or moving a message.

    ``dst_source`` is only needed when moving between sources of the same
    account.  Messages are copied unless ``move`` is true.
    """

    dst_source: str | None = None
    move: Flag | None = None
    flags: MessageFlags | None = Field(default=None, alias="flag")


class FolderMessagesParams(ParameterSet):
    """Parameters for listing live messages in a source folder.

    ``flag_seen`` is tri-state: ``True`` lists read messages, ``False`` lists
    unread ones, ``None`` lists both.
    """

    include_thread_size: Flag | None = None
    include_body: Flag | None = None
    body_type: BodyType | str | None = None
    include_headers: IncludeHeaders | str | None = None
    include_flags: Flag | None = None
    flag_seen: Flag | None = None
    async_: Flag | None = Field(default=None, alias="async")
    limit: Number | None = None
    offset: Number | None = None


class FilesParams(SearchParams):
    """Parameters for listing files found as attachments."""

    file_name: str | None = None
    file_size_min: Number | None = None
    file_size_max: Number | None = None
    group_by_revisions: Flag | None = None


class ThreadsParams(SearchParams):
    """Parameters for listing threads."""

    subject: str | None = None
    folder: str | None = None


class ContactsParams(ParameterSet):
    """Parameters for listing contacts."""

    search: str | None = None
    active_before: Timestamp | None = None
    active_after: Timestamp | None = None
    sort_by: str | None = None
    sort_order: SortOrder | str | None = None
    limit: Number | None = None
    offset: Number | None = None


class SourcesParams(ParameterSet):
    """Parameters for listing sources."""

    status: str | None = None
    status_ok: Flag | None = None


class SourceCreateParams(ParameterSet):
    """Optional parameters when creating a source."""

    sync_period: str | None = None
    raw_file_list: Flag | None = None
    expunge_on_deleted_flag: Flag | None = None
    password: str | None = None
    provider_refresh_token: str | None = None
    provider_consumer_key: str | None = None
    callback_url: str | None = None
    status_callback_url: str | None = None


class SourceModifyParams(ParameterSet):
    """Parameters when modifying a source."""

    status: Number | None = None
    sync_period: str | None = None
    service_level: str | None = None
    password: str | None = None
    provider_refresh_token: str | None = None
    provider_consumer_key: str | None = None
    status_callback_url: str | None = None


class WebhookParams(ParameterSet):
    """Filters and delivery options for creating or updating a webhook."""

    filter_to: str | None = None
    filter_from: str | None = None
    filter_cc: str | None = None
    filter_subject: str | None = None
    filter_thread: str | None = None
    filter_new_important: Flag | None = None
    filter_file_name: str | None = None
    filter_folder_added: str | None = None
    filter_to_domain: str | None = None
    filter_from_domain: str | None = None
    include_body: Flag | None = None
    body_type: BodyType | str | None = None
    include_header: Flag | None = None
    receive_drafts: Flag | None = None
    receive_all_changes: Flag | None = None
    receive_historical: Flag | None = None
    active: Flag | None = None
