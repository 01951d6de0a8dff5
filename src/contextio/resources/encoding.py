"""Parameter encoding: typed parameter sets to the API's string mapping.

Only fields the caller actually set are emitted.  Booleans become ``"1"`` /
``"0"``, enums their value, datetimes Unix seconds, and lists are joined with
commas in the order given.  Nothing is validated here; the server decides
what a bad value means.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Any

from contextio.resources.params import ParameterSet

TRUE_VALUE = "1"
FALSE_VALUE = "0"


def encode_value(value: Any) -> str:
    """Encode a single parameter value using the API's conventions.

    Args:
        value: A bool, enum, datetime, int, string, or list of those.

    Returns:
        The wire representation of ``value``.
    """
    if isinstance(value, bool):
        return TRUE_VALUE if value else FALSE_VALUE
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return str(int(value.timestamp()))
    if isinstance(value, (list, tuple)):
        return ",".join(encode_value(item) for item in value)
    return str(value)


def decode_flag(value: str) -> bool:
    """Decode a boolean encoded by ``encode_value``."""
    return value == TRUE_VALUE


def encode_params(fields: ParameterSet | None, prefix: str = "") -> dict[str, str]:
    """Encode a parameter set into an ordered ``name -> string`` mapping.

    Fields left at ``None`` are omitted.  A nested parameter set (such as
    message flags inside an update) is flattened with its wire name as a key
    prefix, e.g. ``flag`` + ``seen`` -> ``flag_seen``.

    Args:
        fields: The parameter set to encode, or ``None`` for no parameters.
        prefix: Optional prefix prepended to every emitted key.

    Returns:
        A new dict in field declaration order.
    """
    if fields is None:
        return {}

    encoded: dict[str, str] = {}
    for name, info in type(fields).model_fields.items():
        value = getattr(fields, name)
        if value is None:
            continue
        key = f"{prefix}{info.alias or name}"
        if isinstance(value, ParameterSet):
            encoded.update(encode_params(value, prefix=f"{key}_"))
        else:
            encoded[key] = encode_value(value)
    return encoded


def merge_params(
    encoded: Mapping[str, str],
    extra: Mapping[str, Any] | None = None,
) -> dict[str, str]:
    """Layer free-form ``extra`` parameters over an encoded mapping.

    ``extra`` is the escape hatch for API options no parameter set models
    yet.  Its keys win over typed ones on collision.

    Args:
        encoded: Output of ``encode_params`` (or any string mapping).
        extra: Additional parameters; non-string values are encoded with
            ``encode_value``.

    Returns:
        A new merged dict.
    """
    merged = dict(encoded)
    if extra:
        for key, value in extra.items():
            if value is None:
                continue
            merged[str(key)] = value if isinstance(value, str) else encode_value(value)
    return merged
