"""Tests for parameter encoding: typed parameter sets to wire strings.

Covers: unset omission, bool/enum/datetime/list encoding, wire aliases,
nested flag prefixes, determinism, and extra-parameter merging.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from contextio.domain.types import BodyType, IncludeHeaders, SortOrder
from contextio.resources.encoding import (
    FALSE_VALUE,
    TRUE_VALUE,
    decode_flag,
    encode_params,
    encode_value,
    merge_params,
)
from contextio.resources.params import (
    FolderMessagesParams,
    MessageFlags,
    MessagesParams,
    MessageUpdateParams,
    SourceModifyParams,
)

# ---------------------------------------------------------------------------
# encode_value
# ---------------------------------------------------------------------------


class TestEncodeValue:
    """Single-value encoding rules."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (True, "1"),
            (False, "0"),
            (0, "0"),
            (20, "20"),
            ("INBOX", "INBOX"),
            (SortOrder.DESC, "desc"),
            (BodyType.HTML, "text/html"),
            (IncludeHeaders.RAW, "raw"),
            (["a@example.com", "b@example.com"], "a@example.com,b@example.com"),
            ((1, True), "1,1"),
        ],
    )
    def test_encodes(self, value: object, expected: str) -> None:
        assert encode_value(value) == expected

    def test_datetime_becomes_unix_seconds(self) -> None:
        moment = datetime(2015, 6, 1, 12, 0, 0, tzinfo=UTC)
        assert encode_value(moment) == "1433160000"

    def test_bool_checked_before_int(self) -> None:
        # bool is a subclass of int; True must not become "True".
        assert encode_value(True) == TRUE_VALUE
        assert encode_value(False) == FALSE_VALUE


class TestDecodeFlag:
    def test_round_trips_booleans(self) -> None:
        assert decode_flag(encode_value(True)) is True
        assert decode_flag(encode_value(False)) is False

    def test_anything_but_one_is_false(self) -> None:
        assert decode_flag("true") is False


# ---------------------------------------------------------------------------
# encode_params
# ---------------------------------------------------------------------------


class TestEncodeParams:
    """Parameter-set encoding."""

    def test_include_body_and_limit(self) -> None:
        params = MessagesParams(include_body=True, limit=20)
        assert encode_params(params) == {"include_body": "1", "limit": "20"}

    def test_unset_fields_are_omitted(self) -> None:
        assert encode_params(MessagesParams()) == {}

    def test_none_fields_is_empty(self) -> None:
        assert encode_params(None) == {}

    def test_explicit_false_and_zero_are_sent(self) -> None:
        params = MessagesParams(include_body=False, offset=0)
        assert encode_params(params) == {"include_body": "0", "offset": "0"}

    def test_from_alias(self) -> None:
        params = MessagesParams(from_="boss@example.com")
        assert encode_params(params) == {"from": "boss@example.com"}

    def test_from_alias_by_wire_name(self) -> None:
        params = MessagesParams.model_validate({"from": "boss@example.com"})
        assert encode_params(params) == {"from": "boss@example.com"}

    def test_async_alias(self) -> None:
        params = FolderMessagesParams(async_=True, flag_seen=False)
        assert encode_params(params) == {"flag_seen": "0", "async": "1"}

    def test_address_list_is_comma_joined(self) -> None:
        params = MessagesParams(to=["a@example.com", "b@example.com"])
        assert encode_params(params) == {"to": "a@example.com,b@example.com"}

    def test_datetime_and_enum_fields(self) -> None:
        params = MessagesParams(
            date_after=datetime(2015, 6, 1, 12, 0, 0, tzinfo=UTC),
            sort_order=SortOrder.ASC,
            include_headers=IncludeHeaders.RAW,
        )
        assert encode_params(params) == {
            "date_after": "1433160000",
            "sort_order": "asc",
            "include_headers": "raw",
        }

    def test_integer_timestamp_passes_through(self) -> None:
        params = MessagesParams(indexed_after=1433160000)
        assert encode_params(params) == {"indexed_after": "1433160000"}

    def test_nested_flags_are_prefixed(self) -> None:
        params = MessageUpdateParams(move=True, flags=MessageFlags(seen=True, flagged=False))
        assert encode_params(params) == {
            "move": "1",
            "flag_seen": "1",
            "flag_flagged": "0",
        }

    def test_status_zero_is_sent(self) -> None:
        assert encode_params(SourceModifyParams(status=0)) == {"status": "0"}

    def test_malformed_number_is_sent_verbatim(self) -> None:
        assert encode_params(MessagesParams(limit="twenty")) == {"limit": "twenty"}

    def test_malformed_flag_and_timestamp_are_sent_verbatim(self) -> None:
        params = FolderMessagesParams(include_body="yes", flag_seen="maybe")
        assert encode_params(params) == {"include_body": "yes", "flag_seen": "maybe"}
        dated = MessagesParams(date_after="last tuesday")
        assert encode_params(dated) == {"date_after": "last tuesday"}

    def test_typed_values_keep_their_encoding(self) -> None:
        params = MessagesParams(limit=20, include_body=True)
        assert params.limit == 20
        assert params.include_body is True
        assert encode_params(params) == {"include_body": "1", "limit": "20"}

    def test_is_deterministic(self) -> None:
        params = MessagesParams(subject="/^Invoice/", folder="INBOX", limit=5, include_flags=True)
        first = encode_params(params)
        reordered = MessagesParams(
            include_flags=True, limit=5, folder="INBOX", subject="/^Invoice/"
        )
        second = encode_params(reordered)
        assert first == second
        assert list(first) == list(second)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MessagesParams(not_a_field=1)  # type: ignore[call-arg]

    def test_parameter_sets_are_frozen(self) -> None:
        params = MessagesParams(limit=1)
        with pytest.raises(ValidationError):
            params.limit = 2  # type: ignore[misc]


# ---------------------------------------------------------------------------
# merge_params
# ---------------------------------------------------------------------------


class TestMergeParams:
    """Layering free-form extra parameters over encoded ones."""

    def test_extra_wins_on_collision(self) -> None:
        merged = merge_params({"limit": "20"}, {"limit": 50})
        assert merged == {"limit": "50"}

    def test_none_values_are_skipped(self) -> None:
        assert merge_params({"a": "1"}, {"b": None}) == {"a": "1"}

    def test_non_string_values_are_encoded(self) -> None:
        assert merge_params({}, {"include_body": True, "folders": ["A", "B"]}) == {
            "include_body": "1",
            "folders": "A,B",
        }

    def test_input_is_not_mutated(self) -> None:
        encoded = {"a": "1"}
        merge_params(encoded, {"b": "2"})
        assert encoded == {"a": "1"}

    def test_no_extra(self) -> None:
        assert merge_params({"a": "1"}, None) == {"a": "1"}
