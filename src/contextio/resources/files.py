"""Files found as email attachments."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from contextio.domain.models import RequestDescriptor
from contextio.domain.types import HttpMethod, ResponseShape
from contextio.resources.params import FilesParams
from contextio.resources.paths import account_template, build_descriptor

_FILE = "files/{file_id}"


def get_files(
    account_id: str,
    fields: FilesParams | None = None,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """List details of files found as email attachments."""
    return build_descriptor(
        HttpMethod.GET,
        account_template("files"),
        ResponseShape.ARRAY,
        fields=fields,
        extra_params=extra_params,
        account_id=account_id,
    )


def get_file(account_id: str, file_id: str) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.GET,
        account_template(_FILE),
        ResponseShape.DICTIONARY,
        account_id=account_id,
        file_id=file_id,
    )


def _file_listing(resource: str, account_id: str, file_id: str) -> RequestDescriptor:
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_FILE}/{resource}"),
        ResponseShape.ARRAY,
        account_id=account_id,
        file_id=file_id,
    )


def get_file_changes(account_id: str, file_id: str) -> RequestDescriptor:
    """List files that can be compared with the given file."""
    return _file_listing("changes", account_id, file_id)


def get_file_related(account_id: str, file_id: str) -> RequestDescriptor:
    """List files whose names are similar to the given file's."""
    return _file_listing("related", account_id, file_id)


def get_file_revisions(account_id: str, file_id: str) -> RequestDescriptor:
    """List revisions of the given file attached to other emails."""
    return _file_listing("revisions", account_id, file_id)


def get_file_content_url(
    account_id: str,
    file_id: str,
    extra_params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """Build a request for a public download link to the file's contents."""
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_FILE}/content"),
        ResponseShape.STRING,
        params={"as_link": True},
        extra_params=extra_params,
        account_id=account_id,
        file_id=file_id,
    )


def download_file_content(account_id: str, file_id: str) -> RequestDescriptor:
    """Build a request for the raw bytes of the file."""
    return build_descriptor(
        HttpMethod.GET,
        account_template(f"{_FILE}/content"),
        ResponseShape.RAW,
        account_id=account_id,
        file_id=file_id,
    )
