"""Path templating for the Context.IO 2.0 namespace."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from contextio.domain.models import RequestDescriptor
from contextio.domain.types import HttpMethod, ResponseShape
from contextio.resources.encoding import encode_params, merge_params
from contextio.resources.params import ParameterSet

API_VERSION = "2.0"
ACCOUNT_PREFIX = f"{API_VERSION}/accounts/{{account_id}}"

# Placeholders whose values are hierarchical and keep "/" unescaped.
_HIERARCHICAL_PLACEHOLDERS = frozenset({"folder_path"})


def escape_segment(value: str) -> str:
    """Percent-encode one path segment, including any ``/``."""
    return quote(str(value), safe="")


def escape_folder_path(value: str) -> str:
    """Percent-encode a folder path, keeping ``/`` as the hierarchy delimiter."""
    return quote(str(value), safe="/")


def resolve_path(template: str, **segments: str) -> str:
    """Substitute escaped segments into a ``{placeholder}`` path template.

    Args:
        template: A path such as ``2.0/accounts/{account_id}/files/{file_id}``.
        **segments: Raw (unescaped) values for each placeholder.

    Returns:
        The resolved path.
    """
    escaped = {
        name: (
            escape_folder_path(value)
            if name in _HIERARCHICAL_PLACEHOLDERS
            else escape_segment(value)
        )
        for name, value in segments.items()
    }
    return template.format(**escaped)


def account_template(suffix: str = "") -> str:
    """Return the template for a path under ``2.0/accounts/<id>``."""
    return f"{ACCOUNT_PREFIX}/{suffix}" if suffix else ACCOUNT_PREFIX


def build_descriptor(
    method: HttpMethod,
    template: str,
    shape: ResponseShape,
    *,
    fields: ParameterSet | None = None,
    params: Mapping[str, Any] | None = None,
    extra_params: Mapping[str, Any] | None = None,
    unverified: bool = False,
    **segments: str,
) -> RequestDescriptor:
    """Assemble a ``RequestDescriptor`` for one operation.

    Parameter precedence is ``fields`` < ``params`` < ``extra_params``:
    required arguments of an operation go in ``params`` and the caller's
    free-form ``extra_params`` can still override anything.

    Args:
        method: HTTP method of the operation.
        template: Path template with ``{placeholder}`` segments.
        shape: Expected response shape.
        fields: Optional typed parameter set.
        params: Operation-specific parameters added by the builder.
        extra_params: Caller-supplied pass-through parameters.
        unverified: Mark an operation whose wire contract is unconfirmed.
        **segments: Values for the template placeholders.

    Returns:
        A frozen ``RequestDescriptor``.
    """
    encoded = merge_params(encode_params(fields), params)
    return RequestDescriptor(
        method=method,
        path_template=template,
        path=resolve_path(template, **segments),
        params=merge_params(encoded, extra_params),
        response_shape=shape,
        unverified=unverified,
    )
