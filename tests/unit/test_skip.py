"""Unit tests for skipping unrecognized fields."""

from __future__ import annotations

import pytest

from tagwire import (
    MalformedVarint,
    NegativeOrInvalidLength,
    UnexpectedEndGroup,
    UnexpectedEndOfInput,
    UnknownWireType,
    skip_field,
)
from tagwire.codec.wire import encode_varint


class TestSkipField:
    """Test skip_field() on each wire type."""

    @pytest.mark.parametrize(
        "hex_data,size",
        [
            ("08 96 01", 3),
            ("09 0102030405060708", 9),
            ("0a 03 616263", 5),
            ("0d 01020304", 5),
            ("0b 0c", 2),
        ],
    )
    def test_single_field(self, hex_data: str, size: int) -> None:
        """Test the span of one field of each wire type."""
        assert skip_field(bytes.fromhex(hex_data)) == size

    def test_stops_after_one_field(self) -> None:
        """Test only the first field is consumed."""
        assert skip_field(bytes.fromhex("1a03616263 08 01")) == 5

    def test_offset(self) -> None:
        """Test skipping a field in the middle of a buffer."""
        data = bytes.fromhex("08 01 10 96 01 18 02")
        assert skip_field(data, 2) == 3

    def test_group_with_contents(self) -> None:
        """Test a group is skipped together with its inner fields."""
        data = bytes.fromhex("0b 08 01 12 01 61 0c 08 05")
        assert skip_field(data) == 7

    def test_nested_groups(self) -> None:
        """Test depth tracking across nested groups."""
        data = bytes.fromhex("0b 13 18 01 14 0c")
        assert skip_field(data) == 6


class TestSkipErrors:
    """Test skip_field() error handling."""

    def test_empty(self) -> None:
        """Test skipping with nothing to skip."""
        with pytest.raises(UnexpectedEndOfInput):
            skip_field(b"")

    def test_unclosed_group(self) -> None:
        """Test a group missing its end tag."""
        with pytest.raises(UnexpectedEndOfInput):
            skip_field(bytes.fromhex("0b 08 01"))

    def test_stray_end_group(self) -> None:
        """Test an end-group tag at depth zero."""
        with pytest.raises(UnexpectedEndGroup):
            skip_field(bytes.fromhex("0c"))

    def test_unknown_wire_type(self) -> None:
        """Test wire type 7."""
        with pytest.raises(UnknownWireType):
            skip_field(bytes.fromhex("0f"))

    def test_length_past_end(self) -> None:
        """Test a length-delimited field running off the end."""
        with pytest.raises(UnexpectedEndOfInput):
            skip_field(bytes.fromhex("0a 05 6162"))

    def test_invalid_length(self) -> None:
        """Test a length that does not fit a signed 64-bit offset."""
        with pytest.raises(NegativeOrInvalidLength):
            skip_field(bytes.fromhex("0a") + encode_varint(1 << 63))

    def test_length_end_overflows_offset(self) -> None:
        """Test a length whose end offset passes 2**63 - 1."""
        with pytest.raises(NegativeOrInvalidLength):
            skip_field(bytes.fromhex("0a") + encode_varint((1 << 63) - 1))

    def test_truncated_fixed(self) -> None:
        """Test a fixed64 field cut short."""
        with pytest.raises(UnexpectedEndOfInput):
            skip_field(bytes.fromhex("09 0102"))

    def test_malformed_varint(self) -> None:
        """Test an overlong varint value."""
        with pytest.raises(MalformedVarint):
            skip_field(bytes.fromhex("08") + bytes([0x80] * 10) + b"\x01")
