"""Request descriptor builders for every Context.IO 2.0 resource."""

from contextio.resources.encoding import decode_flag, encode_params, encode_value, merge_params
from contextio.resources.params import (
    ContactsParams,
    FilesParams,
    FolderMessagesParams,
    MessageFlags,
    MessageParams,
    MessagesParams,
    MessageUpdateParams,
    ParameterSet,
    SearchParams,
    SourceCreateParams,
    SourceModifyParams,
    SourcesParams,
    ThreadParams,
    ThreadsParams,
    WebhookParams,
)
from contextio.resources.paths import build_descriptor, resolve_path

__all__ = [
    "ContactsParams",
    "FilesParams",
    "FolderMessagesParams",
    "MessageFlags",
    "MessageParams",
    "MessageUpdateParams",
    "MessagesParams",
    "ParameterSet",
    "SearchParams",
    "SourceCreateParams",
    "SourceModifyParams",
    "SourcesParams",
    "ThreadParams",
    "ThreadsParams",
    "WebhookParams",
    "build_descriptor",
    "decode_flag",
    "encode_params",
    "encode_value",
    "merge_params",
    "resolve_path",
]
