"""Unit tests for well-known wrapper messages."""

from __future__ import annotations

import pytest

from tagwire import decode, encode
from tagwire.wellknown import (
    BoolValue,
    BytesValue,
    DoubleValue,
    FloatValue,
    Int32Value,
    Int64Value,
    StringValue,
    UInt32Value,
    UInt64Value,
)


class TestWrappers:
    """Test wrapper encodings."""

    @pytest.mark.parametrize(
        "msg,hex_data",
        [
            (BoolValue(value=True), "0801"),
            (Int32Value(value=-1), "08ffffffffffffffffff01"),
            (Int64Value(value=150), "089601"),
            (UInt32Value(value=1), "0801"),
            (UInt64Value(value=(1 << 64) - 1), "08ffffffffffffffffff01"),
            (FloatValue(value=1.0), "0d0000803f"),
            (DoubleValue(value=1.0), "09000000000000f03f"),
            (StringValue(value="ok"), "0a026f6b"),
            (BytesValue(value=b"\x00"), "0a0100"),
        ],
    )
    def test_wire_bytes(self, msg: object, hex_data: str) -> None:
        """Test each wrapper writes its value at field 1."""
        data = encode(msg)
        assert data == bytes.fromhex(hex_data)
        assert decode(type(msg), data) == msg

    def test_zero_value_is_empty(self) -> None:
        """Test a wrapper holding its zero value encodes to nothing."""
        assert encode(BoolValue(value=False)) == b""
        assert encode(StringValue()) == b""
