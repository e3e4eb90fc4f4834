"""Unit tests for schema-less decoding."""

from __future__ import annotations

import pytest

from tagwire import RawField, UnexpectedEndGroup, UnexpectedEndOfInput, WireType, decode_raw, encode
from tagwire.wellknown import StringValue


class TestDecodeRaw:
    """Test decode_raw()."""

    def test_top_level_fields(self, flags_wire: bytes) -> None:
        """Test fields are listed in wire order."""
        assert decode_raw(flags_wire) == [
            RawField(1, WireType.VARINT, 1),
            RawField(2, WireType.LENGTH_DELIMITED, b"x"),
            RawField(2, WireType.LENGTH_DELIMITED, b"yy"),
        ]

    def test_fixed_values_as_integers(self) -> None:
        """Test fixed fields are read as little-endian unsigned integers."""
        fields = decode_raw(bytes.fromhex("0d 01000000 11 ffffffffffffffff"))
        assert fields[0] == RawField(1, WireType.FIXED32, 1)
        assert fields[1] == RawField(2, WireType.FIXED64, (1 << 64) - 1)

    def test_group_kept_whole(self) -> None:
        """Test a group is returned as its complete encoded span."""
        fields = decode_raw(bytes.fromhex("1b 08 01 1c 20 02"))
        assert fields[0] == RawField(3, WireType.START_GROUP, bytes.fromhex("1b 08 01 1c"))
        assert fields[1] == RawField(4, WireType.VARINT, 2)

    def test_nested_message_payload(self) -> None:
        """Test a nested message can be inspected by decoding its payload."""
        payload = decode_raw(encode(StringValue(value="hi")))
        assert payload == [RawField(1, WireType.LENGTH_DELIMITED, b"hi")]

    def test_empty(self) -> None:
        """Test empty data has no fields."""
        assert decode_raw(b"") == []

    def test_stray_end_group(self) -> None:
        """Test an end-group tag at top level."""
        with pytest.raises(UnexpectedEndGroup):
            decode_raw(bytes.fromhex("0c"))

    def test_truncated(self) -> None:
        """Test a truncated payload."""
        with pytest.raises(UnexpectedEndOfInput):
            decode_raw(bytes.fromhex("0a 03 61"))
